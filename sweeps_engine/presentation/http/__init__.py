from sweeps_engine.presentation.http.handlers import routes

__all__ = ['routes']
