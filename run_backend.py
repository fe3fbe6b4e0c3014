import logging

import fsi_qt_backend


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    fsi_qt_backend.run()
