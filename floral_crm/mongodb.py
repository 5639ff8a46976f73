"""
Configuración de MongoDB usando MongoEngine.
"""

import os

import mongoengine


def connect_mongodb(db=None, host=None, port=None, **kwargs):
    """Conecta a MongoDB. Sin argumentos usa MONGODB_DB, MONGODB_HOST y MONGODB_PORT."""
    return mongoengine.connect(
        db=db or os.environ.get('MONGODB_DB', 'floral_crm'),
        host=host or os.environ.get('MONGODB_HOST', 'localhost'),
        port=port or int(os.environ.get('MONGODB_PORT', '27017')),
        **kwargs,
    )


def disconnect_mongodb():
    """Desconecta de MongoDB."""
    mongoengine.disconnect()
