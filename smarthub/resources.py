from smarthub.api_client import ApiClient, form_parts, parse
from smarthub.models import Resource, ResourceRequest, ResourceType

BASE = "/api/resources"


def list_resources(client: ApiClient, resource_type: ResourceType | None = None, year: int | None = None, search: str | None = None):
    params = {
        "type": resource_type.value if resource_type else None,
        "year": year,
        "query": search,
    }
    return client.get_list(BASE, Resource, params=params)


def get_resource(client: ApiClient, resource_id: int) -> Resource:
    return client.get_model(f"{BASE}/{resource_id}", Resource)


def get_my_resources(client: ApiClient):
    return client.get_list(f"{BASE}/my-resources", Resource)


def get_by_author(client: ApiClient, author_id: int):
    return client.get_list(f"{BASE}/author/{author_id}", Resource)


def get_by_type(client: ApiClient, resource_type: ResourceType):
    return client.get_list(f"{BASE}/type/{resource_type.value}", Resource)


def search_resources(client: ApiClient, query: str):
    return client.get_list(f"{BASE}/search", Resource, params={"query": query})


def _form(request: ResourceRequest, upload):
    # repeated authorIds fields, optional file part
    fields = [
        ("title", request.title),
        ("abstractText", request.abstract_text or ""),
        ("publicationDate", request.publication_date.isoformat()),
        ("type", request.type.value),
    ]
    fields.extend(("authorIds", author_id) for author_id in request.author_ids)
    return form_parts(fields, uploads=[upload] if upload is not None else ())


def create_resource(client: ApiClient, request: ResourceRequest, upload=None) -> Resource:
    """``upload`` is an optional ``(file_name, bytes, content_type)`` tuple."""
    return parse(Resource, client.post(BASE, files=_form(request, upload)))


def update_resource(client: ApiClient, resource_id: int, request: ResourceRequest, upload=None) -> Resource:
    return parse(Resource, client.put(f"{BASE}/{resource_id}", files=_form(request, upload)))


def delete_resource(client: ApiClient, resource_id: int):
    client.delete(f"{BASE}/{resource_id}")
