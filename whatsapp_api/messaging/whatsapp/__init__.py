"""WhatsApp Cloud API messaging package."""
