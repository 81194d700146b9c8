"""Concrete inventory, DNS and DHCP collaborators."""
