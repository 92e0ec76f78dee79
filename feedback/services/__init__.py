from flask import current_app


class ServiceRegistry:
    """Process-wide service singletons, built once by create_app."""

    def __init__(self, shares, files, comments, identity, comment_limiter):
        self.shares = shares
        self.files = files
        self.comments = comments
        self.identity = identity
        self.comment_limiter = comment_limiter


def get_services() -> ServiceRegistry:
    return current_app.extensions["feedback"]
