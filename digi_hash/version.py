"""Digi Hash Meta information.
   Digi Hash encrypts and decrypts JSON payloads exchanged over HTTP.
"""
__title__ = 'digi_hash'
__description__ = (
   'Digi Hash encrypts and decrypts JSON payloads '
   'exchanged between HTTP clients and servers.'
)
__version__ = '1.0.0'
__copyright__ = 'Copyright (c) 2026 Digi Hash Developers'
__author__ = 'Digi Hash Developers'
__author_email__ = 'dev@digihash.io'
__license__ = 'MIT'
__url__ = 'https://github.com/digihash/digi-hash'
