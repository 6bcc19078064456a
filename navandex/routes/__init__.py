from navandex.routes.auth import auth_bp
from navandex.routes.orders import orders_bp, tracking_bp
from navandex.routes.invoices import invoices_bp
from navandex.routes.scan import scan_bp
from navandex.routes.users import users_bp, user_stats_bp
from navandex.routes.content import announcements_bp, banners_bp
from navandex.routes.exchange_rates import exchange_rates_bp
from navandex.routes.reports import reports_bp
from navandex.routes.media import scraper_bp, upload_bp


def register_blueprints(app):
    """Register all blueprints"""
    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(orders_bp, url_prefix='/api/orders')
    app.register_blueprint(tracking_bp, url_prefix='/api/tracking')
    app.register_blueprint(invoices_bp, url_prefix='/api/invoices')
    app.register_blueprint(scan_bp, url_prefix='/api/scan')
    app.register_blueprint(users_bp, url_prefix='/api/users')
    app.register_blueprint(user_stats_bp, url_prefix='/api/user')
    app.register_blueprint(announcements_bp, url_prefix='/api/announcements')
    app.register_blueprint(banners_bp, url_prefix='/api/banners')
    app.register_blueprint(exchange_rates_bp, url_prefix='/api/exchange-rates')
    app.register_blueprint(reports_bp, url_prefix='/api/reports')
    app.register_blueprint(scraper_bp, url_prefix='/api/scraper')
    app.register_blueprint(upload_bp, url_prefix='/api/upload')
