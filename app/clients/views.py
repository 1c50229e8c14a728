from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from core.forms import bind_partial
from core.http import api_errors, parse_json_body

from .forms import ClienteForm
from .helpers import cliente_to_dict
from .models import Cliente
from .services import delete_cliente, get_by_curp, save_cliente


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_errors
def cliente_list(request):
    if request.method == "POST":
        form = ClienteForm(data=parse_json_body(request), files=request.FILES or None)
        cliente = save_cliente(form)
        return JsonResponse(cliente_to_dict(cliente), status=201)

    clientes = Cliente.objects.all()
    return JsonResponse([cliente_to_dict(cliente) for cliente in clientes], safe=False)


@csrf_exempt
@require_http_methods(["GET", "PUT", "PATCH", "DELETE"])
@api_errors
def cliente_detail(request, curp):
    cliente = get_by_curp(curp)

    if request.method == "GET":
        return JsonResponse(cliente_to_dict(cliente))

    if request.method == "DELETE":
        payload = cliente_to_dict(cliente)
        delete_cliente(cliente)
        return JsonResponse(payload)

    form = bind_partial(ClienteForm, cliente, parse_json_body(request), files=request.FILES or None)
    return JsonResponse(cliente_to_dict(save_cliente(form)))
