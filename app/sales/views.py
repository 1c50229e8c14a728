from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from clients.helpers import cliente_to_dict
from core.http import api_errors, parse_json_body, raise_for_form
from inventory.helpers import lote_to_dict

from .forms import ContratoCreateForm, NotificarPagoForm, PagoRegistrarForm
from .helpers import contrato_list_row, contrato_to_dict, pago_to_dict, summary_to_dict
from .models import ContratoVenta
from .services import (
    create_contract,
    get_contrato,
    notify_payment,
    payment_summary,
    register_payment,
)


def _create_contract_response(request):
    form = ContratoCreateForm(data=parse_json_body(request))
    data = raise_for_form(form, "Datos de contrato inválidos")
    result = create_contract(data)
    return JsonResponse(
        {
            "contrato": contrato_to_dict(result.contrato),
            "mensualidad": float(result.mensualidad),
            "pagos": [pago_to_dict(pago) for pago in result.pagos],
        },
        status=201,
    )


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_errors
def contrato_list(request):
    if request.method == "POST":
        return _create_contract_response(request)
    contratos = ContratoVenta.objects.select_related("cliente", "lote")
    return JsonResponse([contrato_list_row(contrato) for contrato in contratos], safe=False)


@csrf_exempt
@require_http_methods(["POST"])
@api_errors
def contrato_create(request):
    return _create_contract_response(request)


@require_http_methods(["GET"])
@api_errors
def pago_detalle(request, id_contrato):
    contrato = get_contrato(id_contrato)
    return JsonResponse([pago_to_dict(pago) for pago in contrato.pagos.all()], safe=False)


@require_http_methods(["GET"])
@api_errors
def contrato_detalle(request, id_contrato):
    contrato = get_contrato(id_contrato)
    return JsonResponse(
        {
            "contrato": contrato_to_dict(contrato),
            "cliente": cliente_to_dict(contrato.cliente),
            "lote": lote_to_dict(contrato.lote),
            "pagos": [pago_to_dict(pago) for pago in contrato.pagos.all()],
            "resumen": summary_to_dict(payment_summary(contrato)),
        }
    )


@csrf_exempt
@require_http_methods(["POST"])
@api_errors
def pago_registrar(request, id_pago):
    form = PagoRegistrarForm(data=parse_json_body(request))
    data = raise_for_form(form)
    pago = register_payment(id_pago, data.get("metodo_pago"))
    return JsonResponse(pago_to_dict(pago))


@require_http_methods(["GET"])
@api_errors
def pago_resumen(request):
    contratos = ContratoVenta.objects.select_related("cliente", "lote").prefetch_related("pagos")
    rows = []
    for contrato in contratos:
        cliente = contrato.cliente
        rows.append(
            {
                "id_contrato": contrato.id,
                "cliente": cliente.full_name,
                "correo": cliente.correo,
                "num_lote": contrato.lote.num_lote,
                "estado_contrato": contrato.estado_contrato,
                **summary_to_dict(payment_summary(contrato)),
            }
        )
    return JsonResponse(rows, safe=False)


@csrf_exempt
@require_http_methods(["POST"])
@api_errors
def pago_notificar(request):
    form = NotificarPagoForm(data=parse_json_body(request))
    data = raise_for_form(form)
    pago = notify_payment(data["id_pago"])
    return JsonResponse({"message": "Notificación enviada", "id_pago": pago.id})
