from travel_api.models.travel import ContactMessage, Destination, Hotel

__all__ = ["ContactMessage", "Destination", "Hotel"]
