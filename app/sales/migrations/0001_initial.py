from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("clients", "0001_initial"),
        ("inventory", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="ContratoVenta",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("precio_total", models.DecimalField(decimal_places=2, max_digits=14, verbose_name="Precio total")),
                ("enganche", models.DecimalField(decimal_places=2, max_digits=14, verbose_name="Enganche")),
                ("plazo_meses", models.PositiveIntegerField(verbose_name="Plazo (meses)")),
                ("estado_contrato", models.CharField(choices=[("activo", "Activo"), ("cancelado", "Cancelado"), ("pagado", "Pagado")], default="activo", max_length=20)),
                ("fecha_contrato", models.DateTimeField(auto_now_add=True)),
                ("cliente", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="contratos", to="clients.cliente")),
                ("lote", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="contratos", to="inventory.lote")),
            ],
            options={"ordering": ["-fecha_contrato", "-id"]},
        ),
        migrations.CreateModel(
            name="Pago",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("numero_pago", models.PositiveIntegerField(verbose_name="Número de pago")),
                ("monto", models.DecimalField(decimal_places=2, max_digits=14, verbose_name="Monto")),
                ("fecha_pago", models.DateField(verbose_name="Fecha de vencimiento")),
                ("metodo_pago", models.CharField(default="pendiente", max_length=50, verbose_name="Método de pago")),
                ("estado_pago", models.CharField(choices=[("pendiente", "Pendiente"), ("pagado", "Pagado"), ("atrasado", "Atrasado")], default="pendiente", max_length=20)),
                ("fecha_pagado", models.DateField(blank=True, null=True, verbose_name="Fecha en que se pagó")),
                ("contrato", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="pagos", to="sales.contratoventa")),
            ],
            options={"ordering": ["numero_pago"], "unique_together": {("contrato", "numero_pago")}},
        ),
    ]
