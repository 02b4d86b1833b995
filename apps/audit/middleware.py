from threading import local

_request_context = local()


def current_request_meta():
    """IP address and user agent of the request being served, if any."""
    return getattr(_request_context, 'meta', {'ip_address': None, 'user_agent': ''})


class AuditContextMiddleware:
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        meta = {
            'ip_address': self.get_client_ip(request),
            'user_agent': request.META.get('HTTP_USER_AGENT', '')[:500],
        }
        request.audit_meta = meta
        _request_context.meta = meta
        try:
            return self.get_response(request)
        finally:
            _request_context.meta = {'ip_address': None, 'user_agent': ''}

    def get_client_ip(self, request):
        forwarded = request.META.get('HTTP_X_FORWARDED_FOR')
        if forwarded:
            return forwarded.split(',')[0].strip()
        return request.META.get('REMOTE_ADDR')
