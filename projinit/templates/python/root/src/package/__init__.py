"""{%= description %}"""

__version__ = "{%= version %}"


def awesome():
    return "awesome"
