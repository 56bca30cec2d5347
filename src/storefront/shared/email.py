"""EmailAddress value object for validated email addresses."""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from storefront.domain import storefront

_FORBIDDEN = (";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\")


@storefront.value_object
class EmailAddress:
    """A validated email address.

    Exactly one @, non-empty local and domain parts, a dotted domain whose
    labels do not start or end with a hyphen, no consecutive dots and no
    whitespace or forbidden characters.
    """

    address: String(required=True, max_length=254)

    @invariant.post
    def verify_email_address(self):
        email = self.address

        if any(ch.isspace() for ch in email) or email.count("@") != 1:
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

        local_part, domain_part = email.split("@", 1)

        if not local_part or local_part.startswith(".") or local_part.endswith("."):
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

        if not domain_part or "." not in domain_part or domain_part.startswith(".") or domain_part.endswith("."):
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

        for label in domain_part.split("."):
            if not label or label.startswith("-") or label.endswith("-"):
                raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

        if ".." in local_part or any(ch in email for ch in _FORBIDDEN):
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})
