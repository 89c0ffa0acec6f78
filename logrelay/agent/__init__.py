from .runner import ShippingAgent, ShippingOutcome, ShippingResult

__all__ = ("ShippingAgent", "ShippingOutcome", "ShippingResult")
