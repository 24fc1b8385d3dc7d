from smarthub.api_client import ApiClient, parse
from smarthub.models import Project, ProjectRequest, WorkStatus

BASE = "/api/projects"


def list_projects(client: ApiClient):
    return client.get_list(BASE, Project)


def get_project(client: ApiClient, project_id: int) -> Project:
    return client.get_model(f"{BASE}/{project_id}", Project)


def get_supervised_projects(client: ApiClient):
    return client.get_list(f"{BASE}/my-projects", Project)


def get_student_projects(client: ApiClient):
    return client.get_list(f"{BASE}/student/my-projects", Project)


def search_projects(client: ApiClient, query: str):
    return client.get_list(f"{BASE}/search", Project, params={"query": query})


def get_projects_by_status(client: ApiClient, status: WorkStatus):
    return client.get_list(f"{BASE}/status/{status.value}", Project)


def create_project(client: ApiClient, request: ProjectRequest) -> Project:
    return parse(Project, client.post(BASE, json=request.wire()))


def update_project(client: ApiClient, project_id: int, request: ProjectRequest) -> Project:
    return parse(Project, client.put(f"{BASE}/{project_id}", json=request.wire()))


def delete_project(client: ApiClient, project_id: int):
    client.delete(f"{BASE}/{project_id}")


def add_student(client: ApiClient, project_id: int, student_id: int) -> Project:
    return parse(Project, client.post(f"{BASE}/{project_id}/students/{student_id}"))


def remove_student(client: ApiClient, project_id: int, student_id: int):
    client.delete(f"{BASE}/{project_id}/students/{student_id}")
