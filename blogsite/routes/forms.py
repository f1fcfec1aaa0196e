from flask import request

from blogsite.errors import ValidationError


FORM_MIMETYPES = {"multipart/form-data", "application/x-www-form-urlencoded"}


def read_form():
    """Return submitted fields as a dict, from a form post or a JSON object."""
    if request.mimetype in FORM_MIMETYPES:
        return request.form.to_dict()

    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Invalid JSON body")
    return data


def read_file(name):
    return request.files.get(name)
