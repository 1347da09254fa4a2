"""Laundry service API: customer accounts, sessions and pickup bookings."""
