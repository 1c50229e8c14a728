from django.db import migrations, models
import core.storages
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("locations", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Lote",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("tipo", models.CharField(choices=[("casa", "Casa"), ("departamento", "Departamento"), ("terreno", "Terreno"), ("local", "Local comercial"), ("otro", "Otro")], max_length=20, verbose_name="Tipo")),
                ("num_lote", models.CharField(max_length=20, verbose_name="Número de lote")),
                ("manzana", models.CharField(blank=True, max_length=20, null=True, verbose_name="Manzana")),
                ("direccion", models.CharField(blank=True, max_length=255, verbose_name="Dirección")),
                ("superficie_m2", models.DecimalField(decimal_places=2, max_digits=10, verbose_name="Superficie (m2)")),
                ("precio", models.DecimalField(decimal_places=2, max_digits=14, verbose_name="Precio")),
                ("estado_propiedad", models.CharField(choices=[("disponible", "Disponible"), ("en proceso", "En proceso"), ("rentada", "Rentada"), ("vendida", "Vendida")], default="disponible", max_length=20, verbose_name="Estado de la propiedad")),
                ("imagen", models.ImageField(blank=True, null=True, storage=core.storages.PublicMediaStorage(), upload_to="lotes/", verbose_name="Foto")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("colonia", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name="lotes", to="locations.colonia")),
            ],
            options={"ordering": ["id"]},
        ),
    ]
