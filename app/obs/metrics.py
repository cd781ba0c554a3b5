# app/obs/metrics.py
import time

from prometheus_client import Counter, Histogram
from starlette.middleware.base import BaseHTTPMiddleware

http_requests_total = Counter("http_requests_total", "HTTP requests", ["method", "path", "code"])
http_request_duration = Histogram(
    "http_request_duration_seconds", "HTTP request duration seconds", ["method", "path"]
)
app_db_errors_total = Counter("app_db_errors_total", "DB errors total", ["op"])

# 订单查询条件编译：part = where / order
order_query_compiled_total = Counter(
    "order_query_compiled_total", "Order query fragments compiled", ["part"]
)
# 被拒绝的订单查询：reason = invalid_sort_field / invalid_filter_field
order_query_rejected_total = Counter(
    "order_query_rejected_total", "Order queries rejected", ["reason"]
)


class PrometheusMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start
        http_requests_total.labels(
            request.method, request.url.path, str(response.status_code)
        ).inc()
        http_request_duration.labels(request.method, request.url.path).observe(elapsed)
        return response
