from django.contrib import admin

from relations.models import Relation


@admin.register(Relation)
class RelationAdmin(admin.ModelAdmin):
    list_display = ("name", "code", "relation_type", "payment_type", "status", "use_count", "created_at")
    list_filter = ("relation_type", "payment_type", "status", "type", "country")
    search_fields = ("name", "code", "phone")
    readonly_fields = ("use_count", "created_by", "created_at", "updated_at")
