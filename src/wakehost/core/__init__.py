"""Packet encoding, delivery and wake orchestration."""
