from cdn_image_audit.domain.protocols.file_search_port import FileSearchPort

__all__ = ["FileSearchPort"]
