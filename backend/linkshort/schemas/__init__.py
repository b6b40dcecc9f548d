from .link import LinkCreate, LinkResponse, MessageResponse

__all__ = ["LinkCreate", "LinkResponse", "MessageResponse"]
