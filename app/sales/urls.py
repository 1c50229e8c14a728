from django.urls import path, re_path

from . import views

app_name = "sales"

urlpatterns = [
    # Alta de contrato con o sin "/" final: un 301 de APPEND_SLASH perdería el cuerpo del POST.
    re_path(r"^contratos/?$", views.contrato_list, name="contrato_list"),
    re_path(r"^contratos/crear/?$", views.contrato_create, name="contrato_create"),
    path("pagos/resumen/", views.pago_resumen, name="pago_resumen"),
    path("pagos/detalle/<int:id_contrato>/", views.pago_detalle, name="pago_detalle"),
    path("pagos/contrato/<int:id_contrato>/", views.contrato_detalle, name="contrato_detalle"),
    path("pagos/<int:id_pago>/registrar/", views.pago_registrar, name="pago_registrar"),
    path("pagos/notificar/", views.pago_notificar, name="pago_notificar"),
]
