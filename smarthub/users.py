from smarthub.api_client import ApiClient, parse
from smarthub.models import ProfileUpdate, Role, UserProfile

BASE = "/api/v1/users"


def get_me(client: ApiClient) -> UserProfile:
    return client.get_model(f"{BASE}/me", UserProfile)


def list_users(client: ApiClient):
    return client.get_list(BASE, UserProfile)


def get_user(client: ApiClient, user_id: int) -> UserProfile:
    return client.get_model(f"{BASE}/{user_id}", UserProfile)


def get_users_by_role(client: ApiClient, role: Role):
    return client.get_list(f"{BASE}/role/{role.value}", UserProfile)


def update_profile(client: ApiClient, update: ProfileUpdate) -> UserProfile:
    return parse(UserProfile, client.put(f"{BASE}/profile", json=update.wire()))
