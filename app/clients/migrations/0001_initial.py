from django.db import migrations, models
import core.storages


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Cliente",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("nombre", models.CharField(max_length=100, verbose_name="Nombre")),
                ("apellido_paterno", models.CharField(max_length=50, verbose_name="Apellido paterno")),
                ("apellido_materno", models.CharField(blank=True, max_length=50, null=True, verbose_name="Apellido materno")),
                ("correo", models.EmailField(max_length=254, unique=True, verbose_name="Correo")),
                ("telefono", models.CharField(blank=True, max_length=20, null=True, unique=True, verbose_name="Teléfono")),
                ("curp", models.CharField(blank=True, max_length=18, null=True, unique=True, verbose_name="CURP")),
                ("clave_elector", models.CharField(blank=True, max_length=20, null=True, unique=True, verbose_name="Clave de elector")),
                ("doc_identificacion", models.FileField(blank=True, null=True, storage=core.storages.PrivateMediaStorage(), upload_to="clientes/identificaciones/", verbose_name="Identificación (PDF)")),
                ("doc_curp", models.FileField(blank=True, null=True, storage=core.storages.PrivateMediaStorage(), upload_to="clientes/curp/", verbose_name="CURP (PDF)")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={"ordering": ["id"]},
        ),
    ]
