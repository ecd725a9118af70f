from api.exceptions import ValidationError


def parse_number(value, label: str) -> int:
    """Path segment -> int, or a 400 naming ``label``."""
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f"{label} number must be a valid number")


class RequiredParamsMixin:
    """
    Reject a request before the handler runs when a declared path or query
    parameter is missing or blank.
    """
    required_path_params = ()
    required_query_params = ()

    def initial(self, request, *args, **kwargs):
        super().initial(request, *args, **kwargs)
        for param in self.required_path_params:
            if not str(kwargs.get(param) or "").strip():
                raise ValidationError(f"Missing required parameter: {param}")
        for param in self.required_query_params:
            if not request.query_params.get(param, "").strip():
                raise ValidationError(f"Missing required query parameter: {param}")
