"""
Webhook ingestion for incoming notifications.
"""
