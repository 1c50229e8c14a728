from django import forms

from core.normalization import normalize_email, normalize_phone

from .models import User

# Nombres del JSON -> campos del modelo
WIRE_FIELDS = {
    "usuario": "username",
    "correo": "email",
    "telefono": "phone",
    "rol": "role",
    "nombre": "first_name",
    "apellido": "last_name",
}


def from_wire(payload):
    return {WIRE_FIELDS.get(key, key): value for key, value in payload.items()}


def to_wire(errors):
    names = {field: key for key, field in WIRE_FIELDS.items()}
    return {names.get(field, field): messages for field, messages in errors.items()}


class UserForm(forms.ModelForm):
    password = forms.CharField(required=False, min_length=6, strip=False)

    class Meta:
        model = User
        fields = ["username", "email", "phone", "role", "first_name", "last_name"]
        error_messages = {
            "username": {"required": "El usuario es obligatorio."},
            "email": {"required": "El correo es obligatorio.", "invalid": "Correo inválido."},
            "role": {"invalid_choice": "Rol inválido."},
        }

    def clean_username(self):
        username = (self.cleaned_data.get("username") or "").strip()
        if not 3 <= len(username) <= 50:
            raise forms.ValidationError("El usuario debe tener entre 3 y 50 caracteres.")
        return username

    def clean_email(self):
        return normalize_email(self.cleaned_data.get("email"))

    def clean_phone(self):
        phone = normalize_phone(self.cleaned_data.get("phone")) or ""
        if phone and (len(phone) != 10 or not phone.isdigit()):
            raise forms.ValidationError("El teléfono debe tener 10 dígitos.")
        return phone

    def save(self, commit=True):
        user = super().save(commit=False)
        password = self.cleaned_data.get("password")
        if password:
            user.set_password(password)
        if commit:
            user.save()
        return user


class UserCreateForm(UserForm):
    password = forms.CharField(required=True, min_length=6, strip=False)


class LoginForm(forms.Form):
    correo = forms.EmailField(error_messages={"required": "Correo y contraseña son requeridos", "invalid": "Formato de correo inválido"})
    password = forms.CharField(strip=False, error_messages={"required": "Correo y contraseña son requeridos"})


class VerifyOtpForm(forms.Form):
    correo = forms.EmailField()
    otp = forms.CharField(max_length=6)


class PasswordResetRequestForm(forms.Form):
    correo = forms.EmailField()


class PasswordResetConfirmForm(forms.Form):
    password = forms.CharField(min_length=6, strip=False)
