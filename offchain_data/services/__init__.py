"""Services Layer: orchestrates core decoders and infrastructure adapters."""
