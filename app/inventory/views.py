from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from core.forms import bind_partial
from core.http import api_errors, parse_json_body

from .forms import LoteForm
from .helpers import lote_to_dict
from .models import Lote
from .services import delete_lote, get_lote, save_lote


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_errors
def lote_list(request):
    if request.method == "POST":
        form = LoteForm(data=parse_json_body(request), files=request.FILES or None)
        lote = save_lote(form)
        return JsonResponse(lote_to_dict(get_lote(lote.pk)), status=201)

    lotes = Lote.objects.select_related("colonia__ciudad")
    estado = request.GET.get("estado")
    if estado:
        lotes = lotes.filter(estado_propiedad=estado)
    return JsonResponse([lote_to_dict(lote) for lote in lotes], safe=False)


@csrf_exempt
@require_http_methods(["GET", "PUT", "PATCH", "DELETE"])
@api_errors
def lote_detail(request, pk):
    lote = get_lote(pk)

    if request.method == "GET":
        return JsonResponse(lote_to_dict(lote))

    if request.method == "DELETE":
        payload = lote_to_dict(lote)
        delete_lote(lote)
        return JsonResponse(payload)

    form = bind_partial(LoteForm, lote, parse_json_body(request), files=request.FILES or None)
    lote = save_lote(form)
    return JsonResponse(lote_to_dict(get_lote(lote.pk)))
