from app.utils.decorators.admin_required import admin_required

__all__ = ['admin_required']
