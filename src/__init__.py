"""Property Image Store Package."""

__version__ = "1.0.0"
__author__ = "Bharat kumar"
__description__ = (
    "Property image management service on AWS Lambda with a file-backed JSON store"
)

__all__ = ["handlers", "core"]
