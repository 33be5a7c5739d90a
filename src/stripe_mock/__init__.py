from .server import FakeStripeServer

__all__ = ["FakeStripeServer"]
