from .json_loader import DocumentLoader, load_document

__all__ = ["DocumentLoader", "load_document"]
