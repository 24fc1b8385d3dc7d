from datetime import date

from smarthub.api_client import ApiClient, parse
from smarthub.models import Internship, InternshipRequest, WorkStatus

BASE = "/api/internships"


def list_internships(
    client: ApiClient,
    status: WorkStatus | None = None,
    company: str | None = None,
    start_date_from: date | None = None,
    start_date_to: date | None = None,
):
    params = {
        "status": status.value if status else None,
        "company": company,
        "startDateFrom": start_date_from.isoformat() if start_date_from else None,
        "startDateTo": start_date_to.isoformat() if start_date_to else None,
    }
    return client.get_list(BASE, Internship, params=params)


def get_internship(client: ApiClient, internship_id: int) -> Internship:
    return client.get_model(f"{BASE}/{internship_id}", Internship)


def get_my_internships(client: ApiClient):
    return client.get_list(f"{BASE}/my-internships", Internship)


def get_supervised_internships(client: ApiClient):
    return client.get_list(f"{BASE}/supervised", Internship)


def search_internships(client: ApiClient, query: str):
    return client.get_list(f"{BASE}/search", Internship, params={"query": query})


def get_internships_by_status(client: ApiClient, status: WorkStatus):
    return client.get_list(f"{BASE}/status/{status.value}", Internship)


def create_internship(client: ApiClient, request: InternshipRequest) -> Internship:
    return parse(Internship, client.post(BASE, json=request.wire()))


def update_internship(client: ApiClient, internship_id: int, request: InternshipRequest) -> Internship:
    return parse(Internship, client.put(f"{BASE}/{internship_id}", json=request.wire()))


def delete_internship(client: ApiClient, internship_id: int):
    client.delete(f"{BASE}/{internship_id}")
