from .cms import HANDLER as CMS_HANDLER

BUILTIN_HANDLERS = [
    CMS_HANDLER,
]
