"""Hub — generic publish/subscribe примитив, из которого собраны все стадии пайплайна."""

from .hub import FunctionListener, NotFound, PublishSubscribeHub, ServiceListener

__all__ = [
    "FunctionListener",
    "NotFound",
    "PublishSubscribeHub",
    "ServiceListener",
]
