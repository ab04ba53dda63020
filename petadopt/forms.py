from __future__ import annotations

from typing import Mapping, Type, TypeVar

from flask import request
from werkzeug.datastructures import MultiDict
from wtforms import Form, IntegerField, StringField, TextAreaField
from wtforms.validators import DataRequired, InputRequired, Length, NumberRange, Optional

from .errors import InvalidArgument

F = TypeVar("F", bound=Form)


def _strip(value):
    return value.strip() if isinstance(value, str) else value


class PetIdForm(Form):
    pet_id = IntegerField(
        "Pet ID",
        validators=[
            InputRequired(),
            NumberRange(min=1, message="Invalid pet ID"),
        ],
    )


class PetForm(Form):
    name = StringField(
        "Name", filters=[_strip], validators=[DataRequired(), Length(max=100)]
    )
    breed = StringField(
        "Breed", filters=[_strip], validators=[DataRequired(), Length(max=100)]
    )
    age = IntegerField(
        "Age",
        validators=[
            InputRequired(),
            NumberRange(min=0, max=1000, message="Age must be a number between 0 and 1000"),
        ],
    )
    description = TextAreaField("Description", filters=[_strip], validators=[Optional()])
    image_url = StringField("Image URL", filters=[_strip], validators=[Optional()])


class AdoptionForm(PetIdForm):
    adopter_name = StringField(
        "Adopter name", filters=[_strip], validators=[DataRequired(), Length(max=100)]
    )
    email = StringField(
        "Email", filters=[_strip], validators=[DataRequired(), Length(max=100)]
    )
    phone = StringField(
        "Phone", filters=[_strip], validators=[DataRequired(), Length(max=20)]
    )
    address = TextAreaField("Address", filters=[_strip], validators=[DataRequired()])


def to_formdata(payload: Mapping) -> MultiDict:
    """Flatten a JSON-ish payload into the string form data WTForms coerces.

    ``None`` and non-scalar values are dropped so that they fail as missing.
    Floats without a fractional part (``3.0``) count as integers.
    """
    data = MultiDict()
    for key, value in (payload or {}).items():
        if isinstance(value, bool) or value is None:
            continue
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        if isinstance(value, (int, float)):
            value = str(value)
        if isinstance(value, str):
            data.add(key, value)
    return data


def request_payload() -> dict:
    """Body of the current request, sent either as JSON or as a form."""
    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        return payload
    return request.form.to_dict()


def validate_payload(form_cls: Type[F], payload: Mapping) -> F:
    form = form_cls(formdata=to_formdata(payload))
    if not form.validate():
        field_name, messages = next(iter(form.errors.items()))
        label = getattr(form, field_name).label.text
        raise InvalidArgument(f"{label}: {messages[0]}", fields=form.errors)
    return form


def parse_pet_id(value) -> int:
    return validate_payload(PetIdForm, {"pet_id": value}).pet_id.data
