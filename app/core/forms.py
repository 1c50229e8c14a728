from django.db.models.fields.files import FieldFile
from django.forms.models import model_to_dict

from .exceptions import ValidationError


def bind_partial(form_class, instance, payload, files=None, **form_kwargs):
    """
    Construye un ModelForm para una actualización parcial.

    Solo se aceptan los campos declarados por el formulario; los campos del
    modelo ausentes en el payload conservan el valor actual de la instancia.
    """
    allowed = list(form_class.base_fields)
    unknown = sorted(set(payload) - set(allowed))
    if unknown:
        raise ValidationError(
            "Campos no permitidos",
            errors={key: ["Campo no permitido."] for key in unknown},
        )
    current = model_to_dict(instance, fields=form_class._meta.fields)
    data = {
        key: value
        for key, value in current.items()
        if value is not None and not isinstance(value, FieldFile)
    }
    data.update(payload)
    return form_class(data=data, files=files, instance=instance, **form_kwargs)
