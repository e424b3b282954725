"""Domain layer: the post record, its codec, and port protocols.

Nothing in this package performs I/O. Adapters implement the ports and use
cases depend on them.
"""

from .models import Post, PostBatch, PostDecodeError, decode_posts, encode_posts

__all__ = ["Post", "PostBatch", "PostDecodeError", "decode_posts", "encode_posts"]
