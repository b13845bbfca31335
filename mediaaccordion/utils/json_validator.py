# mediaaccordion/utils/json_validator.py
import jsonschema
import logging

logger = logging.getLogger(__name__)


def validate_json(data, schema, file_description="JSON data"):
    """
    Validates JSON data against a given schema.

    Args:
        data: The Python object (from json.load) to validate.
        schema (dict): The jsonschema definition.
        file_description (str): A description for error messages.

    Returns:
        tuple: (True, None) if validation succeeds, otherwise
               (False, error) where error is the ValidationError that
               jsonschema ranks as most relevant.
    """
    validator_cls = jsonschema.validators.validator_for(schema)
    validator = validator_cls(schema)
    errors = list(validator.iter_errors(data))
    if not errors:
        logger.debug(f"Validation successful for {file_description}.")
        return True, None

    best = jsonschema.exceptions.best_match(errors)
    logger.warning(f"Validation Error in {file_description}: {describe_validation_error(best)}"
                   f" ({len(errors)} problem(s) in total)")
    return False, best


def describe_validation_error(error):
    """Formats a ValidationError as 'message (at path: a->b)'."""
    if error is None:
        return "Unknown validation error"
    message = getattr(error, "message", str(error))
    path = getattr(error, "path", None)
    if path:
        return f"{message} (at path: {'->'.join(map(str, path))})"
    return message
