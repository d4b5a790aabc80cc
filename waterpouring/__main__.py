"""Run the development server: python -m waterpouring"""
import os

from waterpouring import create_app


def main():
    app = create_app()
    app.run(host=os.environ.get('WATERPOURING_HOST', '127.0.0.1'),
            port=int(os.environ.get('WATERPOURING_PORT', '5000')))


if __name__ == '__main__':
    main()
