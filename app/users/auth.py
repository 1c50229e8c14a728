"""
Inicio de sesión en dos pasos (contraseña + código OTP por correo) y
recuperación de contraseña.

Los códigos, los contadores de intentos y los tokens de recuperación viven en
``TransientStore`` con expiración; nada de esto se guarda en tablas propias.
"""
import logging
import time
from smtplib import SMTPException

from django.conf import settings
from django.contrib.auth import password_validation
from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.mail import send_mail
from django.template.loader import render_to_string
from django.utils.crypto import constant_time_compare, get_random_string

from core.exceptions import BusinessRuleError, DeliveryError, NotFoundError, ValidationError
from core.normalization import normalize_email
from core.transient import TransientStore

from .models import User

logger = logging.getLogger(__name__)

store = TransientStore(prefix="auth:")

OTP_DIGITS = "0123456789"


def _now():
    return time.time()


def _attempts_key(correo):
    return f"login-attempts:{correo}"


def _lock_key(correo):
    return f"login-lock:{correo}"


def _otp_key(correo):
    return f"otp:{correo}"


def _reset_key(token):
    return f"reset:{token}"


def _send(subject, template, context, recipient):
    body = render_to_string(template, context)
    try:
        send_mail(subject, body, settings.DEFAULT_FROM_EMAIL, [recipient])
    except (SMTPException, OSError) as exc:
        logger.error("No se pudo enviar '%s' a %s", subject, recipient, exc_info=exc)
        raise DeliveryError("No se pudo enviar el correo") from exc


def _user_by_email(correo):
    user = User.objects.filter(email=correo).first()
    if user is None:
        raise NotFoundError("Usuario no encontrado", code="usuario_no_encontrado")
    return user


def start_login(correo, password):
    """Valida la contraseña y envía el código OTP. Devuelve el usuario."""
    correo = normalize_email(correo)
    user = _user_by_email(correo)

    if store.get(_lock_key(correo)):
        raise BusinessRuleError("Usuario bloqueado temporalmente", code="usuario_bloqueado")

    if not user.is_active or not user.check_password(password):
        attempts = store.incr(_attempts_key(correo), settings.LOGIN_LOCKOUT_SECONDS * 10)
        if attempts >= settings.LOGIN_MAX_ATTEMPTS:
            store.set(_lock_key(correo), True, settings.LOGIN_LOCKOUT_SECONDS)
            store.delete(_attempts_key(correo))
            logger.warning("Usuario %s bloqueado por %s intentos fallidos", correo, attempts)
            raise BusinessRuleError("Usuario bloqueado por intentos fallidos", code="usuario_bloqueado")
        raise ValidationError("Contraseña incorrecta", code="credenciales_invalidas")

    store.delete(_attempts_key(correo))
    code = get_random_string(6, OTP_DIGITS)
    ttl = settings.OTP_TTL_SECONDS
    # El registro sobrevive a su vencimiento para distinguir "expirado" de "no generado".
    store.set(_otp_key(correo), {"code": code, "expires_at": _now() + ttl}, ttl * 2)
    _send(
        "Código de verificación (2FA)",
        "users/email/otp.txt",
        {"user": user, "code": code, "minutes": ttl // 60},
        correo,
    )
    logger.info("OTP enviado a %s", correo)
    return user


def verify_otp(correo, otp):
    """Consume el código y devuelve el usuario autenticado."""
    correo = normalize_email(correo)
    entry = store.get(_otp_key(correo))
    if not entry:
        raise ValidationError("OTP no generado", code="otp_no_generado")
    if _now() > entry["expires_at"]:
        store.delete(_otp_key(correo))
        raise ValidationError("OTP expirado", code="otp_expirado")
    if not constant_time_compare(str(otp or "").strip(), entry["code"]):
        raise ValidationError("OTP incorrecto", code="otp_incorrecto")
    store.delete(_otp_key(correo))
    return _user_by_email(correo)


def request_password_reset(correo):
    correo = normalize_email(correo)
    user = _user_by_email(correo)
    token = get_random_string(64)
    ttl = settings.PASSWORD_RESET_TTL_SECONDS
    store.set(_reset_key(token), user.pk, ttl)
    _send(
        "Recuperación de contraseña",
        "users/email/password_reset.txt",
        {"user": user, "link": f"{settings.FRONTEND_RESET_URL}{token}", "minutes": ttl // 60},
        correo,
    )
    logger.info("Token de recuperación enviado a %s", correo)
    return token


def reset_password(token, password):
    user_id = store.get(_reset_key(token))
    if user_id is None:
        raise ValidationError("Token inválido o expirado", code="token_invalido")
    user = User.objects.filter(pk=user_id).first()
    if user is None:
        raise NotFoundError("Usuario no encontrado", code="usuario_no_encontrado")
    try:
        password_validation.validate_password(password, user)
    except DjangoValidationError as exc:
        raise ValidationError("Contraseña inválida", errors={"password": list(exc.messages)})
    user.set_password(password)
    user.save(update_fields=["password"])
    store.delete(_reset_key(token))
    logger.info("Contraseña actualizada para %s", user.email)
    return user
