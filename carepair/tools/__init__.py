from carepair.tools.services import SERVICE_CATALOG, SERVICE_TYPES, TIME_SLOTS, get_all_services

__all__ = ["SERVICE_CATALOG", "SERVICE_TYPES", "TIME_SLOTS", "get_all_services"]
