"""AWS implementations of the certsync service blueprints."""

from .acm import Certificates
from .route53 import DNS

__all__ = ["Certificates", "DNS"]
