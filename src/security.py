"""Security configuration and request validation forms."""

from flask_wtf import FlaskForm
from wtforms import StringField, ValidationError

from services.input_parser import parse_whole_number


class SecurityConfig:
    """Security configuration constants."""

    # Rate limiting
    RATE_LIMIT_PER_MINUTE = "120/minute"
    RATE_LIMIT_PER_HOUR = "2000/hour"

    # CORS settings
    CORS_METHODS = ["GET", "POST", "DELETE", "OPTIONS"]
    CORS_HEADERS = ["Content-Type", "X-CSRFToken"]

    # Security headers
    SECURITY_HEADERS = {
        "X-Content-Type-Options": "nosniff",
        "X-Frame-Options": "SAMEORIGIN",
        "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
        "Referrer-Policy": "strict-origin-when-cross-origin",
        "Permissions-Policy": "geolocation=(), microphone=(), camera=(), payment=()",
    }

    # CSP (Content Security Policy); the API serves JSON only
    CSP_POLICY = "default-src 'none'; frame-ancestors 'none'; base-uri 'none'"


class ConversionForm(FlaskForm):
    """Form for a single conversion value (mm or L)."""

    class Meta:
        # CSRFProtect checks the X-CSRFToken header for the whole app
        csrf = False

    value = StringField(
        "Value",
        description="Dipstick reading in mm or volume in liters",
    )

    parsed_value: int | None = None

    def validate_value(form, field):
        """Parse the raw value into a non-negative whole number."""
        if field.data is None or field.data == "":
            raise ValidationError("Value is required")
        parsed = parse_whole_number(field.data)
        if not parsed.ok:
            raise ValidationError(parsed.error)
        form.parsed_value = parsed.value
