"""Certificate service blueprint."""

from abc import ABC, abstractmethod

from certsync.base.models import DomainValidation, Tag


class CertificateBlueprint(ABC):
    """Abstract interface for the certificate-issuing service.

    Maps to AWS Certificate Manager. Implementations that also inherit
    :class:`~certsync.base.async_support.AsyncMixin` expose ``alist_tags``
    and ``adescribe_validations``, which the reconciler awaits.
    """

    @abstractmethod
    def list_tags(self, certificate_arn: str) -> list[Tag]:
        """Return the certificate's tags in the order the service reports them.

        Raises:
            CertificateNotFoundError: If the certificate does not exist.
            CertificateError: On any other service failure.
        """

    @abstractmethod
    def describe_validations(self, certificate_arn: str) -> list[DomainValidation]:
        """Return the certificate's domain validation options.

        Entries whose DNS record has not been assigned yet carry
        ``record=None``.

        Raises:
            CertificateNotFoundError: If the certificate does not exist.
            CertificateError: On any other service failure.
        """
