"""BarberX backend: salon, barber and customer profile API."""

__version__ = "0.1.0"
