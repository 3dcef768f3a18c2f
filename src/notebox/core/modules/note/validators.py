from notebox.errors import ValidationError

TITLE_MAX_LENGTH = 255


def validate_title(title: str) -> str:
    """Validate note title is between 1 and 255 characters.

    Raises:
        ValidationError: If title is empty or too long
    """
    if not title:
        raise ValidationError("Title cannot be empty")
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(f"Title must be at most {TITLE_MAX_LENGTH} characters long")
    return title
