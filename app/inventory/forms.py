from decimal import Decimal, InvalidOperation

from django import forms

from .models import Lote


class LoteForm(forms.ModelForm):
    precio = forms.CharField(required=True)

    # Ubicación: colonia existente o nueva dentro de una ciudad
    id_colonia = forms.IntegerField(required=False, min_value=1)
    nombre_colonia_nueva = forms.CharField(required=False, max_length=150)
    id_ciudad = forms.IntegerField(required=False, min_value=1)
    codigo_postal = forms.CharField(required=False, max_length=5)

    class Meta:
        model = Lote
        fields = [
            "tipo",
            "num_lote",
            "manzana",
            "direccion",
            "superficie_m2",
            "precio",
            "estado_propiedad",
            "imagen",
        ]
        error_messages = {
            "tipo": {"required": "El tipo es obligatorio.", "invalid_choice": "Tipo de lote inválido."},
            "num_lote": {"required": "El número de lote es obligatorio."},
            "superficie_m2": {"required": "La superficie es obligatoria."},
            "estado_propiedad": {"invalid_choice": "Estado de propiedad inválido."},
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["estado_propiedad"].required = False

    def _parse_currency(self, value):
        if value in (None, ""):
            return None
        if isinstance(value, (int, float, Decimal)):
            return Decimal(str(value))
        raw = str(value).replace("$", "").replace(",", "").strip()
        try:
            return Decimal(raw)
        except InvalidOperation:
            return None

    def clean_precio(self):
        value = self._parse_currency(self.cleaned_data.get("precio"))
        if value is None:
            raise forms.ValidationError("El precio debe ser un número.")
        if value <= 0:
            raise forms.ValidationError("El precio debe ser positivo.")
        return value.quantize(Decimal("0.01"))

    def clean_superficie_m2(self):
        value = self.cleaned_data.get("superficie_m2")
        if value is not None and value <= 0:
            raise forms.ValidationError("La superficie debe ser positiva.")
        return value

    def clean_manzana(self):
        return (self.cleaned_data.get("manzana") or "").strip() or None

    def clean_estado_propiedad(self):
        return self.cleaned_data.get("estado_propiedad") or Lote.Estado.DISPONIBLE

    def clean(self):
        cleaned = super().clean()
        num_lote = cleaned.get("num_lote")
        if num_lote:
            manzana = cleaned.get("manzana")
            duplicates = Lote.objects.filter(num_lote=num_lote)
            if manzana:
                duplicates = duplicates.filter(manzana=manzana)
            else:
                duplicates = duplicates.filter(manzana__isnull=True)
            if self.instance.pk:
                duplicates = duplicates.exclude(pk=self.instance.pk)
            if duplicates.exists():
                self.add_error("num_lote", "Ya existe un lote con ese número y manzana.")
        return cleaned
