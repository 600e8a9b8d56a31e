"""
Launch pad bookings service.

Books SpaceX launch pads on dates that are free of scheduled launches.
"""

__version__ = "1.0.0"
