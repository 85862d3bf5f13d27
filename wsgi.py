"""
WSGI entry point — used by gunicorn in production.
"""
from leaddesk import create_app
from leaddesk.config import PORT

app = create_app()

if __name__ == '__main__':
    app.run(host='0.0.0.0', port=PORT, threaded=True)
