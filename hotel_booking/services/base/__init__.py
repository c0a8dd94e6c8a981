from hotel_booking.services.base.base_service import BaseService, track_performance

__all__ = ["BaseService", "track_performance"]
