"""Domain errors raised by the service layer and mapped to HTTP by the routers."""


class NotFoundError(ValueError):
    pass


class ConflictError(ValueError):
    pass


class BusinessRuleError(ValueError):
    pass


class AuthenticationError(Exception):
    pass


class PermissionDeniedError(Exception):
    pass
