class OrderError(Exception):
    status_code = 400
    code = "order_error"

    def __init__(self, message, **context):
        super().__init__(message)
        self.message = message
        self.context = context


class ReferenceNotFound(OrderError):
    status_code = 404
    code = "not_found"


class ReferenceInactive(OrderError):
    code = "reference_inactive"


class InvalidStatusError(OrderError):
    code = "invalid_status"


class InvalidOrderStateError(OrderError):
    code = "invalid_state"
