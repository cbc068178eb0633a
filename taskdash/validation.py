"""
Payload validation for the dashboard API.

FieldValidator checks a JSON payload against a field schema and returns the
validated values keyed by attribute name. Every problem is collected and
reported together in one ValidationError.

Schema keys per field:
    type        "string" or "boolean"
    required    missing / empty value is an error
    allow_empty an empty string counts as a value (strings only)
    allowed     list of permitted values
    max_length  upper bound on string length
    pattern_hint "email" requires an @ in the value
    attr        attribute name in the output (defaults to the field name)
"""
from typing import Any, Dict, List

from .schema import Priority


class ValidationError(Exception):
    """Raised when a payload fails validation. Carries per-field errors."""

    def __init__(self, message: str, errors: List[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message, "errors": self.errors}


TASK_SCHEMA = {
    "title":       {"type": "string", "required": True, "max_length": 200},
    "description": {"type": "string", "required": True, "allow_empty": True, "max_length": 2000},
    "priority":    {"type": "string", "required": True, "allowed": Priority.values()},
    "dueDate":     {"type": "string", "required": True, "attr": "due_date", "max_length": 100},
    "completed":   {"type": "boolean"},
}

USER_SCHEMA = {
    "username":     {"type": "string"},
    "name":         {"type": "string"},
    "email":        {"type": "string", "pattern_hint": "email"},
    "role":         {"type": "string", "allow_empty": True},
    "department":   {"type": "string", "allow_empty": True},
    "location":     {"type": "string", "allow_empty": True},
    "profileImage": {"type": "string", "attr": "profile_image", "allow_empty": True},
    "joinDate":     {"type": "string", "attr": "join_date", "allow_empty": True},
}


class FieldValidator:
    """Validates payload dicts against a field schema."""

    def validate(self, payload: Any, schema: dict, partial: bool = False) -> dict:
        """
        Validate payload against schema.

        With partial=True every field is optional (PATCH semantics).

        Returns:
            dict of validated values keyed by attribute name.

        Raises:
            ValidationError listing every offending field.
        """
        if not isinstance(payload, dict):
            raise ValidationError("Invalid data", [
                {"field": "", "message": "Request body must be a JSON object"}
            ])

        errors = []
        result = {}

        for name, rules in schema.items():
            value = payload.get(name)
            attr = rules.get("attr", name)
            required = rules.get("required", False) and not partial
            ftype = rules.get("type", "string")

            # ── Missing value handling ──
            empty_ok = rules.get("allow_empty", False)
            if value is None or (value == "" and not empty_ok):
                if value == "" and not required and name in payload:
                    errors.append({"field": name, "message": f"{name} must not be empty"})
                elif required:
                    errors.append({"field": name, "message": f"Missing required field: {name}"})
                continue

            # ── Type: string ──
            if ftype == "string":
                if not isinstance(value, str):
                    errors.append({"field": name, "message": f"{name} must be a string"})
                    continue
                allowed = rules.get("allowed")
                if allowed and value not in allowed:
                    errors.append({
                        "field": name,
                        "message": f"Invalid value for {name}: '{value}'. "
                                   f"Allowed: {', '.join(allowed)}",
                    })
                    continue
                max_length = rules.get("max_length")
                if max_length is not None and len(value) > max_length:
                    errors.append({
                        "field": name,
                        "message": f"{name} must be at most {max_length} characters",
                    })
                    continue
                if rules.get("pattern_hint") == "email" and "@" not in value:
                    errors.append({"field": name, "message": f"{name} must be an email address"})
                    continue

            # ── Type: boolean ──
            elif ftype == "boolean":
                if not isinstance(value, bool):
                    errors.append({"field": name, "message": f"{name} must be true or false"})
                    continue

            else:
                raise ValueError(f"Unknown field type in schema: {ftype}")

            result[attr] = value

        # ── Reject unknown fields ──
        unknown = set(payload.keys()) - set(schema.keys())
        for name in sorted(unknown):
            errors.append({"field": name, "message": f"Unknown field: {name}"})

        if errors:
            raise ValidationError("Invalid data", errors)
        return result


_validator = FieldValidator()


def validate_new_task(payload: Any) -> dict:
    return _validator.validate(payload, TASK_SCHEMA)


def validate_task_update(payload: Any) -> dict:
    return _validator.validate(payload, TASK_SCHEMA, partial=True)


def validate_user_update(payload: Any) -> dict:
    return _validator.validate(payload, USER_SCHEMA, partial=True)
