"""
Provider error hierarchy
"""


class ProviderError(Exception):
    """Base class for landmark provider failures"""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class MissingCredentialError(ProviderError):
    """No usable credential for the selected provider (raised before any network call)"""


class ProviderRequestError(ProviderError):
    """Transport, authentication or non-success HTTP status"""


class MalformedResponseError(ProviderError):
    """Provider replied, but the payload is not valid landmark JSON"""
