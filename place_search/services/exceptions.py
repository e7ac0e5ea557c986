"""Domain-specific exceptions."""


class ServiceError(Exception):
    pass


class MalformedBlobError(ServiceError):
    pass


class CatalogUnavailable(ServiceError):
    pass
