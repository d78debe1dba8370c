"""certsync: keep ACM DNS validation records in step with CloudFormation.

Subscribe :func:`certsync.handler.handler` to the SNS topic a stack
publishes its events to. Certificates tagged ``HostedZoneId`` get their
validation CNAMEs created in that Route 53 zone while CloudFormation waits
for issuance, and removed again once the certificate is deleted::

    from certsync import Reconciler, service_factory

    reconciler = Reconciler(service_factory("certificates"), service_factory("dns"))
"""

from .base import CertificateBlueprint, DNSBlueprint
from .classifier import classify, classify_message
from .correlator import correlate, embedded_domain, is_validation_record
from .factory import service_factory
from .parser import parse_message
from .reconciler import Notification, Reconciler

__all__ = [
    "CertificateBlueprint",
    "DNSBlueprint",
    "classify",
    "classify_message",
    "correlate",
    "embedded_domain",
    "is_validation_record",
    "parse_message",
    "service_factory",
    "Notification",
    "Reconciler",
]
