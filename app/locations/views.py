from django.http import JsonResponse
from django.views.decorators.http import require_http_methods

from core.exceptions import NotFoundError
from core.http import api_errors

from .models import Ciudad, Colonia, Estado


@require_http_methods(["GET"])
def estado_list(request):
    items = list(Estado.objects.values("id", "nombre_estado"))
    return JsonResponse(items, safe=False)


@require_http_methods(["GET"])
def ciudad_list(request, estado_id):
    items = list(
        Ciudad.objects.filter(estado_id=estado_id).values("id", "estado_id", "nombre_ciudad")
    )
    return JsonResponse(items, safe=False)


@require_http_methods(["GET"])
def colonia_list(request, ciudad_id):
    items = list(
        Colonia.objects.filter(ciudad_id=ciudad_id).values(
            "id", "ciudad_id", "nombre_colonia", "codigo_postal"
        )
    )
    return JsonResponse(items, safe=False)


@require_http_methods(["GET"])
@api_errors
def ciudad_por_codigo_postal(request, codigo_postal):
    colonia = (
        Colonia.objects.select_related("ciudad__estado")
        .filter(codigo_postal=codigo_postal)
        .order_by("id")
        .first()
    )
    if colonia is None:
        raise NotFoundError("Código postal no encontrado")
    ciudad = colonia.ciudad
    return JsonResponse(
        {
            "id_ciudad": ciudad.id,
            "nombre_ciudad": ciudad.nombre_ciudad,
            "id_estado": ciudad.estado_id,
            "nombre_estado": ciudad.estado.nombre_estado,
        }
    )
