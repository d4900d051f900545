from laundry.services.controller import Controller

__all__ = ["Controller"]
