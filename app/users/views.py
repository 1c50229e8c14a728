from django.contrib.auth import login, logout
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from core.exceptions import NotFoundError, ValidationError
from core.forms import bind_partial
from core.http import api_errors, form_errors, parse_json_body, raise_for_form

from . import auth
from .forms import (
    LoginForm,
    PasswordResetConfirmForm,
    PasswordResetRequestForm,
    UserCreateForm,
    UserForm,
    VerifyOtpForm,
    from_wire,
    to_wire,
)
from .helpers import user_to_dict
from .models import User


def _get_user(pk):
    user = User.objects.filter(pk=pk).first()
    if user is None:
        raise NotFoundError("Usuario no encontrado")
    return user


def _save_user(form):
    if not form.is_valid():
        raise ValidationError("Error de validación", errors=to_wire(form_errors(form)))
    return form.save()


# ── Autenticación ──────────────────────────────────────────────

@csrf_exempt
@require_http_methods(["POST"])
@api_errors
def login_view(request):
    data = raise_for_form(LoginForm(data=parse_json_body(request)), "Correo y contraseña son requeridos")
    auth.start_login(data["correo"], data["password"])
    return JsonResponse({"status": "success", "message": "Código 2FA enviado al correo"})


@csrf_exempt
@require_http_methods(["POST"])
@api_errors
def verify_otp_view(request):
    data = raise_for_form(VerifyOtpForm(data=parse_json_body(request)))
    user = auth.verify_otp(data["correo"], data["otp"])
    login(request, user)
    return JsonResponse({"status": "success", "user": user_to_dict(user)})


@csrf_exempt
@require_http_methods(["POST"])
def logout_view(request):
    logout(request)
    return JsonResponse({"status": "success"})


@csrf_exempt
@require_http_methods(["POST"])
@api_errors
def password_reset_request(request):
    data = raise_for_form(PasswordResetRequestForm(data=parse_json_body(request)))
    auth.request_password_reset(data["correo"])
    return JsonResponse({"status": "success", "message": "Se envió un enlace de recuperación al correo"})


@csrf_exempt
@require_http_methods(["POST"])
@api_errors
def password_reset_confirm(request, token):
    data = raise_for_form(PasswordResetConfirmForm(data=parse_json_body(request)))
    auth.reset_password(token, data["password"])
    return JsonResponse({"status": "success", "message": "Contraseña actualizada"})


@require_http_methods(["GET"])
def me_view(request):
    return JsonResponse(user_to_dict(request.user))


# ── Usuarios ───────────────────────────────────────────────────

@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_errors
def user_list(request):
    if request.method == "POST":
        form = UserCreateForm(data=from_wire(parse_json_body(request)))
        return JsonResponse(user_to_dict(_save_user(form)), status=201)

    users = User.objects.order_by("username")
    rol = request.GET.get("rol")
    if rol:
        users = users.filter(role=rol)
    return JsonResponse([user_to_dict(user) for user in users], safe=False)


@csrf_exempt
@require_http_methods(["GET", "PUT", "PATCH", "DELETE"])
@api_errors
def user_detail(request, pk):
    user = _get_user(pk)

    if request.method == "GET":
        return JsonResponse(user_to_dict(user))

    if request.method == "DELETE":
        payload = user_to_dict(user)
        user.delete()
        return JsonResponse(payload)

    form = bind_partial(UserForm, user, from_wire(parse_json_body(request)))
    return JsonResponse(user_to_dict(_save_user(form)))
