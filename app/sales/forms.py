from decimal import Decimal

from django import forms

from core.normalization import normalize_email

from .models import ContratoVenta

CLIENT_DATA_FIELDS = ("nombre", "apellido_paterno", "apellido_materno", "telefono")
PLAZO_MAXIMO_MESES = 600


class ContratoCreateForm(forms.Form):
    """
    Forma del payload de alta de contrato. No consulta la base de datos: la
    existencia del lote y del cliente se resuelve dentro de la transacción.
    """
    id_lote = forms.IntegerField(min_value=1)
    precio_total = forms.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal("0.01"))
    enganche = forms.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal("0"))
    plazo_meses = forms.IntegerField(min_value=1, max_value=PLAZO_MAXIMO_MESES)

    id_cliente = forms.IntegerField(required=False, min_value=1)
    correo_cliente = forms.EmailField(required=False)
    nombre = forms.CharField(required=False, max_length=100)
    apellido_paterno = forms.CharField(required=False, max_length=50)
    apellido_materno = forms.CharField(required=False, max_length=50)
    telefono = forms.CharField(required=False, max_length=20)

    estado_contrato = forms.ChoiceField(choices=ContratoVenta.Estado.choices, required=False)

    def clean_correo_cliente(self):
        return normalize_email(self.cleaned_data.get("correo_cliente"))

    def clean_estado_contrato(self):
        return self.cleaned_data.get("estado_contrato") or ContratoVenta.Estado.ACTIVO

    def clean(self):
        cleaned = super().clean()
        id_cliente = cleaned.get("id_cliente")
        missing_customer = not id_cliente and not cleaned.get("correo_cliente")
        if missing_customer and not {"id_cliente", "correo_cliente"} & set(self.errors):
            self.add_error("correo_cliente", "Indique id_cliente o correo_cliente.")
        if id_cliente:
            for field in CLIENT_DATA_FIELDS:
                if cleaned.get(field):
                    self.add_error(field, "No se permite cuando se indica id_cliente.")
        return cleaned


class PagoRegistrarForm(forms.Form):
    metodo_pago = forms.CharField(required=False, max_length=50)

    def clean_metodo_pago(self):
        return self.cleaned_data.get("metodo_pago") or None


class NotificarPagoForm(forms.Form):
    id_pago = forms.IntegerField(min_value=1)
