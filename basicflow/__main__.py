from .app import create_app
from .config import DEBUG, configure_logging

configure_logging(verbose=DEBUG)

app = create_app()
server = app.server

if __name__ == '__main__':
    app.run(debug=DEBUG)
