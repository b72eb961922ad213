# profit_sharing/api/serializers.py

from rest_framework import serializers

from profit_sharing.models import ManualProfitDistribution, ProfitShare


class MonthlyProfitRowSerializer(serializers.Serializer):
    id = serializers.CharField()
    total_profit = serializers.DecimalField(max_digits=16, decimal_places=2)
    currency = serializers.CharField()
    created_at = serializers.DateTimeField()
    from_system = serializers.BooleanField()
    notes = serializers.CharField(allow_blank=True)
    from_date = serializers.DateField(allow_null=True)
    to_date = serializers.DateField(allow_null=True)
    partners = serializers.ListField(child=serializers.DictField(), required=False)


class ShareRowSerializer(serializers.Serializer):
    id = serializers.CharField()
    profit_month_id = serializers.CharField()
    partner_id = serializers.CharField()
    partner_name = serializers.CharField()
    percentage = serializers.DecimalField(max_digits=5, decimal_places=2)
    amount = serializers.DecimalField(max_digits=16, decimal_places=2)
    notes = serializers.CharField(allow_blank=True)


class ProfitShareSerializer(serializers.ModelSerializer):
    class Meta:
        model = ProfitShare
        fields = [
            "id",
            "monthly_profit",
            "partner",
            "partner_name",
            "percentage",
            "amount",
            "notes",
            "created_by",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ProfitShareCreateSerializer(serializers.Serializer):
    month_id = serializers.CharField(max_length=7)
    partner_id = serializers.UUIDField()
    percentage = serializers.DecimalField(max_digits=5, decimal_places=2)
    amount = serializers.DecimalField(max_digits=16, decimal_places=2, required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class ProfitShareUpdateSerializer(serializers.Serializer):
    percentage = serializers.DecimalField(max_digits=5, decimal_places=2, required=False)
    amount = serializers.DecimalField(max_digits=16, decimal_places=2, required=False)
    notes = serializers.CharField(required=False, allow_blank=True)


class DistributionPartnerSerializer(serializers.Serializer):
    partner_id = serializers.UUIDField()
    percentage = serializers.DecimalField(max_digits=5, decimal_places=2)


class ManualDistributionInputSerializer(serializers.Serializer):
    from_date = serializers.DateField()
    to_date = serializers.DateField()
    profit = serializers.DecimalField(max_digits=16, decimal_places=2)
    currency = serializers.CharField(max_length=3)
    partners = DistributionPartnerSerializer(many=True)
    notes = serializers.CharField(required=False, allow_blank=True)


class ManualDistributionSerializer(serializers.ModelSerializer):
    partners = serializers.SerializerMethodField()

    class Meta:
        model = ManualProfitDistribution
        fields = [
            "id",
            "from_date",
            "to_date",
            "profit",
            "currency",
            "distributed_total",
            "revision",
            "notes",
            "partners",
            "created_by",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_partners(self, obj):
        return [
            {
                "partner_id": str(line.partner_id),
                "partner_name": line.partner_name,
                "percentage": str(line.percentage),
                "amount": str(line.amount),
            }
            for line in obj.partners.all()
        ]
