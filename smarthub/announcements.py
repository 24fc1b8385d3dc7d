from smarthub.api_client import ApiClient, parse
from smarthub.models import Announcement, AnnouncementRequest, AnnouncementType

BASE = "/api/v1/announcements"


def list_announcements(client: ApiClient):
    return client.get_list(BASE, Announcement)


def get_published(client: ApiClient):
    return client.get_list(f"{BASE}/published", Announcement)


def get_recent(client: ApiClient):
    return client.get_list(f"{BASE}/recent", Announcement)


def get_announcement(client: ApiClient, announcement_id: int) -> Announcement:
    return client.get_model(f"{BASE}/{announcement_id}", Announcement)


def get_my_announcements(client: ApiClient):
    return client.get_list(f"{BASE}/my-announcements", Announcement)


def get_by_type(client: ApiClient, announcement_type: AnnouncementType, published_only: bool = False):
    path = f"{BASE}/type/{announcement_type.value}"
    if published_only:
        path += "/published"
    return client.get_list(path, Announcement)


def search_announcements(client: ApiClient, query: str):
    return client.get_list(f"{BASE}/search", Announcement, params={"query": query})


def create_announcement(client: ApiClient, request: AnnouncementRequest) -> Announcement:
    return parse(Announcement, client.post(BASE, json=request.wire()))


def update_announcement(client: ApiClient, announcement_id: int, request: AnnouncementRequest) -> Announcement:
    return parse(Announcement, client.put(f"{BASE}/{announcement_id}", json=request.wire()))


def delete_announcement(client: ApiClient, announcement_id: int):
    client.delete(f"{BASE}/{announcement_id}")


def toggle_publish(client: ApiClient, announcement_id: int) -> Announcement:
    return parse(Announcement, client.patch(f"{BASE}/{announcement_id}/toggle-publish"))
