from smarthub.api_client import ApiClient
from smarthub.models import PlatformStats


def get_dashboard_stats(client: ApiClient) -> PlatformStats:
    return client.get_model("/api/v1/stats/dashboard", PlatformStats)


def get_admin_stats(client: ApiClient) -> PlatformStats:
    return client.get_model("/api/v1/stats/admin", PlatformStats)
