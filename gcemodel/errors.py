"""
Errors raised while building models or mapping them to and from the wire form.
"""


class ComputeModelError(ValueError):
    """Base class for every mapping or construction failure."""


class MalformedUrlError(ComputeModelError):
    def __init__(self, url, expected: str):
        super().__init__(f"'{url}' is not a valid {expected} URL")
        self.url = url
        self.expected = expected


class MalformedTimestampError(ComputeModelError):
    def __init__(self, value):
        super().__init__(f"'{value}' is not an ISO-8601 timestamp")
        self.value = value


class MalformedIdError(ComputeModelError):
    def __init__(self, value):
        super().__init__(f"'{value}' is not a decimal resource id")
        self.value = value


class MissingFieldError(ComputeModelError):
    def __init__(self, field: str, owner: str):
        super().__init__(f"{owner} is missing required field '{field}'")
        self.field = field
        self.owner = owner


class UnknownStatusError(ComputeModelError):
    def __init__(self, value):
        super().__init__(f"'{value}' is not a known deprecation state")
        self.value = value


class InvalidFieldError(ComputeModelError):
    def __init__(self, field: str, owner: str, expected: str):
        super().__init__(f"{owner} field '{field}' is not {expected}")
        self.field = field
        self.owner = owner
        self.expected = expected


class TimestampRangeError(ComputeModelError):
    def __init__(self, value):
        super().__init__(f"{value} is outside the representable timestamp range (years 1-9999)")
        self.value = value
