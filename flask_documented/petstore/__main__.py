import os

from . import create_app

if __name__ == '__main__':  # pragma: no cover
    create_app().run(host=os.getenv('HOST', '127.0.0.1'), port=int(os.getenv('PORT', '8080')))
