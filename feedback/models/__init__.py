from .share import Share
from .file import File
from .comment import Comment
