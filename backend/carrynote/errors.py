class ValidationError(ValueError):
    """Caller-correctable input error.

    Raised by the payslip calculator and translated to HTTP 422 by the
    routers. The message is shown to the user as-is.
    """
