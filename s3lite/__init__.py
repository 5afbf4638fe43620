from .s3 import S3Connection

__all__ = [
    "S3Connection",
]
