from gas_estimation.rest_api.middlewares.route_logger import RouteLoggerMiddleware
