from django.contrib import admin

from segments.models import PeriodPartner, SegmentEntry, SegmentPartnerShare, SegmentPeriod


class ReadOnlyAdmin(admin.ModelAdmin):
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


class SegmentEntryInline(admin.TabularInline):
    model = SegmentEntry
    extra = 0
    can_delete = False
    fields = ("invoice_number", "client_name", "tickets", "visas", "hotels", "groups", "total", "firm_share", "partner_share")
    readonly_fields = fields


class PeriodPartnerInline(admin.TabularInline):
    model = PeriodPartner
    extra = 0
    can_delete = False
    fields = ("partner_name", "percentage")
    readonly_fields = fields


@admin.register(SegmentPeriod)
class SegmentPeriodAdmin(ReadOnlyAdmin):
    list_display = ("id", "from_date", "to_date", "currency", "grand_total", "firm_total", "distributed_total", "created_by_name")
    list_filter = ("currency", "has_partner")
    inlines = [PeriodPartnerInline, SegmentEntryInline]


@admin.register(SegmentEntry)
class SegmentEntryAdmin(ReadOnlyAdmin):
    list_display = ("invoice_number", "client_name", "total", "firm_share", "partner_share", "period")
    search_fields = ("invoice_number", "client_name")


@admin.register(SegmentPartnerShare)
class SegmentPartnerShareAdmin(ReadOnlyAdmin):
    list_display = ("entry", "partner_name", "share")
