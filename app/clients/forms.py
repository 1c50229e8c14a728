from django import forms

from core.normalization import (
    normalize_curp,
    normalize_email,
    normalize_person_name,
    normalize_phone,
)

from .models import Cliente

UNIQUE_FIELDS = (
    ("correo", "correo"),
    ("telefono", "teléfono"),
    ("curp", "CURP"),
    ("clave_elector", "clave de elector"),
)


class ClienteForm(forms.ModelForm):
    curp = forms.CharField(max_length=18)

    class Meta:
        model = Cliente
        fields = [
            "nombre",
            "apellido_paterno",
            "apellido_materno",
            "correo",
            "telefono",
            "curp",
            "clave_elector",
            "doc_identificacion",
            "doc_curp",
        ]
        error_messages = {
            "nombre": {"required": "El nombre es obligatorio."},
            "apellido_paterno": {"required": "El apellido paterno es obligatorio."},
            "correo": {"required": "El correo es obligatorio.", "invalid": "Correo inválido."},
        }

    def clean_nombre(self):
        return normalize_person_name(self.cleaned_data.get("nombre"))

    def clean_apellido_paterno(self):
        return normalize_person_name(self.cleaned_data.get("apellido_paterno"))

    def clean_apellido_materno(self):
        return normalize_person_name(self.cleaned_data.get("apellido_materno")) or None

    def clean_correo(self):
        return normalize_email(self.cleaned_data.get("correo"))

    def clean_telefono(self):
        telefono = normalize_phone(self.cleaned_data.get("telefono"))
        if telefono and (len(telefono) != 10 or not telefono.isdigit()):
            raise forms.ValidationError("El teléfono debe tener 10 dígitos.")
        return telefono

    def clean_curp(self):
        curp = normalize_curp(self.cleaned_data.get("curp"))
        if len(curp) != 18:
            raise forms.ValidationError("La CURP debe tener 18 caracteres.")
        return curp

    def clean_clave_elector(self):
        return normalize_curp(self.cleaned_data.get("clave_elector")) or None

    def validate_unique(self):
        for field, label in UNIQUE_FIELDS:
            value = self.cleaned_data.get(field)
            if not value:
                continue
            duplicates = Cliente.objects.filter(**{field: value})
            if self.instance.pk:
                duplicates = duplicates.exclude(pk=self.instance.pk)
            if duplicates.exists():
                self.add_error(field, f"El {label} '{value}' ya está registrado en otro cliente.")
