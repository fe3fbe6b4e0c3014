"""
Headless fsinfo backend serving folder listings & drives to UI clients.

Clients connect via `multiprocessing.connection` on localhost and send dicts:
  {'nav': path}            -> path, parent, folders & files of the directory,
                              an empty path means the start up directory
  {'drives': True}         -> list of available volumes
  {'home': True}           -> the users home directory
  {'hide_dotfiles': bool}  -> switch hidden file filtering
  {'link_down': True}      -> client is leaving
Failing requests are answered with an 'error' message.
"""

import os
import sys
import logging
import threading
import dataclasses
from datetime import datetime
from multiprocessing.connection import Listener

from PySide6 import QtCore

import fsinfo
import fsi_common
import fsi_config
from fsi_listing import DirectoryLister, ListerConfig

log = logging.getLogger(f'{fsi_common.NAME}.backend')


class FsInfoBackend(QtCore.QCoreApplication):
    def __init__(self):
        super().__init__(sys.argv)
        self.navigation = Navigation(self)

        self.clients = ClientHandler(self)
        self.clients.request.connect(self.navigation.handle)

        self.navigation.results.connect(self.clients.reply)
        self.navigation.error.connect(self.clients.reply)


class ClientHandler(QtCore.QObject):
    request = QtCore.Signal(object)

    def __init__(self, parent):
        super().__init__(parent)

        self._clients: list[dict] = []
        self._client_lock = threading.Lock()

        self._client_listener = ClientListener(self)
        self._client_listener.new_client.connect(self._new_client)
        self._client_listener.finished.connect(self._client_listener.deleteLater)
        self._client_listener.start()

    def _new_client(self, client_data: dict):
        with self._client_lock:
            self._clients.append(client_data)
        log.info('New client, %i connected.', len(self._clients))

        client_thread = ClientThread(self, client_data)
        client_thread.message_received.connect(self._handle_message)
        client_thread.finished.connect(self._cleanup_client)
        client_data['thread'] = client_thread
        client_thread.start()

    def _get_client_data(self, thread):
        client_data = next(
            (d for d in self._clients if d.get('thread') is thread), None
        )
        if client_data is None:
            log.error('Could not get `client_data` from thread: %s', thread)
        return client_data

    def _handle_message(self, message: dict):
        client_data = self._get_client_data(self.sender())
        if client_data is None:
            return

        if message.get('link_down', False):
            log.info('Client leaving: %s', client_data['connection'])
            self._cleanup_client(client_data)
            return

        message['connection'] = client_data['connection']
        self.request.emit(message)

    def _cleanup_client(self, client_data=None):
        if client_data is None:
            client_data = self._get_client_data(self.sender())
        if client_data is None:
            return

        with self._client_lock:
            if client_data in self._clients:
                self._clients.remove(client_data)
        log.info('Client removed, %i connected.', len(self._clients))

    def reply(self, message):
        connection = message.pop('connection', None)
        if connection is None or connection.closed:
            return
        try:
            connection.send(message)
        except OSError as error:
            log.warning('Could not reply to client: %s', error)


class ClientListener(QtCore.QThread):
    """Thread handling all incoming client connection requests."""

    new_client = QtCore.Signal(object)

    def __init__(self, parent: QtCore.QObject):
        super().__init__(parent)
        self._listener: None | Listener = None

    def start_listening(self):
        if self._listener is not None:
            log.warning("We're already listening!! %s", self._listener.address)
            return

        from_port, to_port = (
            fsi_config.general.port,
            fsi_config.general.port + fsi_config.general.port_range,
        )
        for port in range(from_port, to_port):
            try:
                self._listener = Listener(('localhost', port), authkey=fsi_common.KEY)
                log.info('👂 Listening for UI connections on %s', self._listener.address)
                fsi_config.general.port = port
                return

            except OSError:
                continue

        raise ConnectionError(
            f'Could not start listening on ports from {from_port} '
            f'to {to_port}! Giving up!'
        )

    def run(self):
        self.start_listening()

        while self.isRunning() and self._listener is not None:
            try:
                connection = self._listener.accept()
                log.info('🔌 UI client connected from %s', self._listener.last_accepted)
                self.new_client.emit(
                    {'connection': connection, 'connected_at': datetime.now()}
                )

            except OSError as error:
                if not self.isRunning():
                    continue
                log.error('Error accepting client connection: %s', error)


class ClientThread(QtCore.QThread):
    """Thread listening for messages from one of the clients."""

    message_received = QtCore.Signal(object)

    def __init__(self, parent, client_data):
        super().__init__(parent)
        self._connection = client_data['connection']

    def run(self):
        try:
            while self.isRunning() and not self.isInterruptionRequested():
                if self._connection.poll(timeout=1.0):
                    self.message_received.emit(self._connection.recv())

        except (EOFError, ConnectionResetError, BrokenPipeError):
            log.info('🔌 UI client disconnected')
        finally:
            self._connection.close()


class Navigation(QtCore.QObject):
    """Answers client requests about folders and drives.

    Messages come back with the results added, or with an 'error' entry.
    Everything else in the message (like the client connection) is passed along.
    """

    results = QtCore.Signal(object)
    error = QtCore.Signal(object)

    def __init__(self, parent=None, lister: DirectoryLister | None = None):
        super().__init__(parent)
        if lister is None:
            lister = DirectoryLister(ListerConfig.from_settings())
        self._lister = lister

    def handle(self, message: dict):
        if 'nav' in message:
            self.lookup(message)
        elif 'drives' in message:
            self.drives(message)
        elif 'home' in message:
            self.home(message)
        elif 'hide_dotfiles' in message:
            self._lister.config.hide_dotfiles = bool(message['hide_dotfiles'])
            self.results.emit(message)
        else:
            message['error'] = 'Unknown request!'
            self.error.emit(message)

    def lookup(self, message: dict):
        path = message['nav']
        if not isinstance(path, str):
            message['error'] = f'Path must be a string, not {type(path).__name__}!'
            self.error.emit(message)
            return
        if not path.strip():
            path = os.path.expanduser(fsi_config.navigation.start_up_directory)

        log.debug('Looking up: %s ...', path)
        try:
            listing = self._lister.list(path)
        except (OSError, ValueError) as error:
            message['error'] = str(error)
            self.error.emit(message)
            return

        message['path'] = listing.path
        message['parent'] = listing.parent
        message['folders'] = [dataclasses.asdict(f) for f in listing.folders]
        message['files'] = [dataclasses.asdict(f) for f in listing.files]
        self.results.emit(message)
        fsi_config.navigation._last_directory = listing.path

    def drives(self, message: dict):
        message['drives'] = [dataclasses.asdict(v) for v in fsinfo.enumerate_volumes()]
        self.results.emit(message)

    def home(self, message: dict):
        try:
            message['home'] = fsinfo.get_home_directory()
        except RuntimeError as error:
            message['error'] = str(error)
            self.error.emit(message)
            return
        self.results.emit(message)


def run():
    app = FsInfoBackend()
    sys.exit(app.exec())
