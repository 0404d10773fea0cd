from rest_framework.views import exception_handler


def _first_message(data):
    if isinstance(data, dict):
        for value in data.values():
            return _first_message(value)
    if isinstance(data, list | tuple) and data:
        return _first_message(data[0])
    return str(data)


def api_exception_handler(exc, context):
    """Render every DRF error as `{"error": "..."}`; field errors keep their detail under `errors`."""
    response = exception_handler(exc, context)
    if response is None:
        return None

    data = response.data
    if isinstance(data, dict) and set(data) == {"detail"}:
        response.data = {"error": str(data["detail"])}
    elif isinstance(data, dict) and "error" in data:
        response.data = {"error": _first_message(data["error"]), "errors": data}
    else:
        response.data = {"error": _first_message(data), "errors": data}
    return response
