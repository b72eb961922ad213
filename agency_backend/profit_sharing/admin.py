from django.contrib import admin

from profit_sharing.models import (
    ManualDistributionPartner,
    ManualProfitDistribution,
    MonthlyProfit,
    ProfitShare,
)


class ProfitShareInline(admin.TabularInline):
    model = ProfitShare
    extra = 0
    fields = ("partner_name", "percentage", "amount", "notes")
    readonly_fields = fields


@admin.register(MonthlyProfit)
class MonthlyProfitAdmin(admin.ModelAdmin):
    list_display = ("id", "total_profit", "currency", "updated_at")
    readonly_fields = ("created_at", "updated_at")
    inlines = [ProfitShareInline]


class ManualDistributionPartnerInline(admin.TabularInline):
    model = ManualDistributionPartner
    extra = 0
    fields = ("partner_name", "percentage", "amount")
    readonly_fields = fields


@admin.register(ManualProfitDistribution)
class ManualProfitDistributionAdmin(admin.ModelAdmin):
    list_display = ("id", "from_date", "to_date", "profit", "currency", "revision", "created_by")
    list_filter = ("currency",)
    readonly_fields = ("distributed_total", "revision", "created_by", "created_at", "updated_at")
    inlines = [ManualDistributionPartnerInline]
