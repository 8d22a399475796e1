"""
sio_capture: capture PayPal -> provisioning systeme.io (contact + inscriptions).
"""

__version__ = "1.0.0"
