"""Clients for external API interactions."""
from postcode_locator.clients.locations_client import LocationsClient
from postcode_locator.clients.geocoding_client import GoogleGeocoder, PostcodesIoGeocoder, default_geocoder

__all__ = ["LocationsClient", "GoogleGeocoder", "PostcodesIoGeocoder", "default_geocoder"]
