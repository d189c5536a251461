import structlog
from django.db import DatabaseError, connections
from django.http import JsonResponse

logger = structlog.get_logger(__name__)


def healthz(request):
    try:
        with connections['default'].cursor() as c:
            c.execute('SELECT 1')
            row = c.fetchone()
        return JsonResponse({'success': True, 'status': 'ok', 'db': bool(row and row[0] == 1)})
    except DatabaseError as e:
        logger.error('health_check_failed', error=str(e))
        return JsonResponse({'success': False, 'status': 'error', 'message': str(e)}, status=503)
