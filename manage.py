import os
import sys
import time
import django
from django.db import connections
from django.db.utils import OperationalError


def wait_for_db():
    print("⏳ Waiting for database to become available...")
    for i in range(20):
        try:
            connections["default"].cursor()
            print("✅ Database is ready!")
            return
        except OperationalError:
            time.sleep(1)
    raise RuntimeError("❌ Database not ready after waiting 20 seconds.")


def init_superuser():
    from django.contrib.auth import get_user_model
    user = get_user_model()

    admin_email = os.environ.get("DJANGO_ADMIN_EMAIL", "admin@example.com")
    admin_name = os.environ.get("DJANGO_ADMIN_NAME", "Admin")
    admin_password = os.environ.get("DJANGO_ADMIN_PASSWORD", "admin123")

    if not user.objects.filter(email=admin_email).exists():
        user.objects.create_superuser( # type: ignore[attr-defined]
            email=admin_email,
            password=admin_password,
            name=admin_name,
        )
        print(f"✅ Superuser '{admin_email}' created successfully!")
    else:
        print(f"ℹ️ Superuser '{admin_email}' already exists.")

def main():
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

    runserver = len(sys.argv) > 1 and sys.argv[1] == "runserver"

    try:
        from django.core.management import execute_from_command_line, call_command
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Make sure it's installed and available on your PYTHONPATH."
        ) from exc

    if runserver and os.environ.get("RUN_MAIN") != "true":
        print("💾 Setting up Django...")
        django.setup()
        wait_for_db()

        print("💾 Applying migrations automatically...")
        call_command("migrate", interactive=False)

        print("💻 Checking/creating superuser...")
        init_superuser()

    execute_from_command_line(sys.argv)


if __name__ == "__main__":
    main()
