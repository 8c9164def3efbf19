class ServiceError(Exception):
    pass


class InvalidInputError(ServiceError):
    pass


class UnauthorizedError(ServiceError):
    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class UpstreamFetchError(ServiceError):
    def __init__(self, url: str, status_code: int | None = None, reason: str = "Request failed"):
        if status_code is not None:
            message = f"Failed to fetch URL: {reason} ({status_code})"
        else:
            message = f"Failed to fetch URL: {reason}"
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.reason = reason


class NetworkTimeoutError(UpstreamFetchError):
    def __init__(self, url: str, timeout_seconds: float):
        super().__init__(url, reason=f"Network timeout after {timeout_seconds}s")
        self.timeout_seconds = timeout_seconds


class ExtractionError(ServiceError):
    pass


class ExtractionConfigurationError(ExtractionError):
    pass


class StoreError(ServiceError):
    pass


class StoreUnavailableError(StoreError):
    def __init__(self, message: str = "Database not configured"):
        super().__init__(message)


class RecipeNotFoundError(StoreError):
    def __init__(self, recipe_id: str):
        super().__init__(f"Recipe not found: {recipe_id}")
        self.recipe_id = recipe_id
