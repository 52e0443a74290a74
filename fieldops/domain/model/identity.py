"""Identity managed by the external identity provider."""

from fieldops.domain.model.common import DomainModel
from fieldops.domain.value import Email, IdentityId


class Identity(DomainModel):
    """Authenticated principal.

    Owned by the identity provider; this service only references it by id.
    """

    id: IdentityId
    email: Email
