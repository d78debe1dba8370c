"""AWS service factory.

Maps service names to their AWS SDK implementations.
``SERVICE_REGISTRY`` is consumed by :func:`certsync.factory.service_factory`.
"""

from certsync.aws.acm import Certificates
from certsync.aws.route53 import DNS


# Service registry for AWS
SERVICE_REGISTRY: dict[str, type] = {
    "certificates": Certificates,
    "dns": DNS,
}
