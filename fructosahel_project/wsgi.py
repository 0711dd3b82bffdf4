# fructosahel_project/wsgi.py
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'fructosahel_project.settings')

application = get_wsgi_application()
