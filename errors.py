"""Error types raised by the services and mapped to HTTP responses in main.py"""


class MockupError(Exception):
    """Base error. `message` is safe to return to the client."""

    status_code = 500
    default_message = "An unexpected error occurred."

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidRequest(MockupError):
    status_code = 400
    default_message = "Invalid request."


class UnsupportedMediaType(MockupError):
    status_code = 400
    default_message = "Invalid file type. Only JPEG, PNG, and GIF are allowed."


class PayloadTooLarge(MockupError):
    status_code = 400
    default_message = "File too large. Maximum size is 10MB."


class FetchError(MockupError):
    status_code = 400
    default_message = "Failed to fetch image from URL."


class DecodeError(MockupError):
    status_code = 400
    default_message = "Image could not be decoded."


class GeometryError(MockupError):
    status_code = 400
    default_message = "Invalid placement geometry."


class ProviderTaskError(MockupError):
    status_code = 502
    default_message = "Mockup provider task failed."


class ProviderTaskTimeout(MockupError):
    status_code = 504
    default_message = "Mockup provider task timed out."


class StorageError(MockupError):
    status_code = 500
    default_message = "Error uploading image to storage."
