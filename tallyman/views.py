"""
JSON endpoints for stock batches.

    POST batches/               submit a batch        -> 201 {batchId, matched, modified, upserts}
    GET  batches/               paginated history     -> {data, meta}
    GET  batches/<id>/          batch + label items
    GET  batches/<id>/export/   CSV download

Authentication and authorization belong to the host project
(wrap these views or include them behind its own middleware).
"""

import json
import logging

from django.http import HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods

from tallyman.exceptions import LedgerError
from tallyman.service import Ledger

logger = logging.getLogger('tallyman')

GENERIC_ERROR = 'Unexpected server error'


@csrf_exempt
@require_http_methods(["GET", "POST"])
def batches(request):
    if request.method == 'POST':
        return _submit(request)

    params = request.GET
    try:
        page = int(params.get('page') or 1)
        limit = int(params.get('limit') or 0) or None
    except ValueError:
        return JsonResponse({'error': 'Invalid pagination'}, status=400)

    try:
        listing = Ledger.list_batches(
            page=page,
            limit=limit,
            sort=params.get('sort', 'desc'),
            direction=params.get('type') or None,
        )
    except Exception:
        logger.exception("ledger.view.list_failed")
        return JsonResponse({'error': GENERIC_ERROR}, status=500)
    return JsonResponse(listing)


def _submit(request):
    try:
        payload = json.loads(request.body or b'null')
    except (ValueError, UnicodeDecodeError):
        return JsonResponse(
            {'error': 'Invalid payload', 'issues': {'__all__': ['JSON inválido.']}},
            status=400,
        )

    try:
        result = Ledger.submit(payload)
    except LedgerError as exc:
        if exc.code == 'INVALID_PAYLOAD':
            return JsonResponse({'error': 'Invalid payload', 'issues': exc.issues}, status=400)
        logger.exception("ledger.view.submit_failed", extra={"code": exc.code})
        return JsonResponse({'error': GENERIC_ERROR}, status=500)
    except Exception:
        logger.exception("ledger.view.submit_failed")
        return JsonResponse({'error': GENERIC_ERROR}, status=500)

    return JsonResponse(result.as_dict(), status=201)


def _failed(event: str, exc: Exception, batch_id) -> JsonResponse:
    if isinstance(exc, LedgerError) and exc.code == 'BATCH_NOT_FOUND':
        return JsonResponse({'error': exc.message, 'code': exc.code}, status=404)
    logger.error(event, exc_info=exc, extra={"batch_id": batch_id})
    return JsonResponse({'error': GENERIC_ERROR}, status=500)


@require_GET
def batch_detail(request, batch_id):
    try:
        batch = Ledger.get_batch(batch_id)
        return JsonResponse(Ledger.detail(batch))
    except Exception as exc:
        return _failed("ledger.view.detail_failed", exc, batch_id)


@require_GET
def batch_export(request, batch_id):
    try:
        batch = Ledger.get_batch(batch_id)
        response = HttpResponse(content_type='text/csv; charset=utf-8')
        response['Content-Disposition'] = f'attachment; filename=batch_{batch.pk}.csv'
        response['Cache-Control'] = 'no-store'
        Ledger.export_csv(batch, response)
    except Exception as exc:
        return _failed("ledger.view.export_failed", exc, batch_id)
    return response
