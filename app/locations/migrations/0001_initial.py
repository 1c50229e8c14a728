from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Estado",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("nombre_estado", models.CharField(max_length=100, unique=True, verbose_name="Estado")),
            ],
            options={"ordering": ["nombre_estado"]},
        ),
        migrations.CreateModel(
            name="Ciudad",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("nombre_ciudad", models.CharField(max_length=100, verbose_name="Ciudad")),
                ("estado", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="ciudades", to="locations.estado")),
            ],
            options={
                "verbose_name_plural": "Ciudades",
                "ordering": ["nombre_ciudad"],
                "unique_together": {("estado", "nombre_ciudad")},
            },
        ),
        migrations.CreateModel(
            name="Colonia",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("nombre_colonia", models.CharField(max_length=150, verbose_name="Colonia")),
                ("codigo_postal", models.CharField(blank=True, db_index=True, max_length=5, verbose_name="Código Postal")),
                ("ciudad", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="colonias", to="locations.ciudad")),
            ],
            options={"ordering": ["nombre_colonia"]},
        ),
    ]
