"""
Configuration loading and connection construction
"""

import yaml
from pathlib import Path
from typing import Dict, Any, List, Optional
import copy
import logging

from sqlalchemy import create_engine

from .backends import DuckDBConnection, SQLAlchemyConnection
from .connection import Connection

logger = logging.getLogger(__name__)

CONFIG_RELATIVE_PATH = Path('config') / 'typed_query.yaml'

# Backends whose database is a local file named by database.path
FILE_DATABASES = ('duckdb', 'sqlite')

DEFAULT_CONFIG = {
    'database': {
        'type': 'duckdb',
        'path': 'data/todo.duckdb',
        'settings': {
            'max_memory': '1GB',
            'threads': 2
        }
    },
    'logging': {
        'level': 'INFO',
        'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    }
}


class Config:
    """Application configuration read from a YAML file."""

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize configuration from YAML file.

        Args:
            config_path: Path to configuration file. If None, searches upward
                from the working directory for config/typed_query.yaml.
        """
        if config_path is None:
            current = Path.cwd()
            while current != current.parent:
                if (current / CONFIG_RELATIVE_PATH).exists():
                    config_path = current / CONFIG_RELATIVE_PATH
                    break
                current = current.parent

            if config_path is None:
                config_path = CONFIG_RELATIVE_PATH

        self.config_path = Path(config_path)
        self._config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file, falling back to defaults."""
        if not self.config_path.exists():
            logger.warning(f"Config file not found: {self.config_path}")
            return copy.deepcopy(DEFAULT_CONFIG)

        with open(self.config_path, 'r') as f:
            loaded = yaml.safe_load(f) or {}

        return _merge(copy.deepcopy(DEFAULT_CONFIG), loaded)

    @property
    def data(self) -> Dict[str, Any]:
        return self._config

    @property
    def db_type(self) -> str:
        return self.get('database.type', 'duckdb')

    @property
    def log_level(self) -> str:
        return self.get('logging.level', 'INFO')

    @property
    def connection_params(self) -> Dict[str, Any]:
        """Connection parameters for DatabaseConfig.get_connection.

        ``path`` names the database file and only applies to file backends;
        server backends take ``database`` or fall back to their own default.
        """
        database = dict(self.get('database', {}))
        params = {key: value for key, value in database.items() if key not in ('type', 'path')}
        if 'database' not in params and self.db_type in FILE_DATABASES:
            params['database'] = database.get('path', ':memory:')
        return params

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by dot-separated key.

        Args:
            key: Dot-separated configuration key (e.g., 'database.path')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        value = self._config

        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


class DatabaseConfig:
    """Builds connections for the supported database types"""

    @staticmethod
    def get_connection(db_type: str, connection_params: Dict[str, Any]) -> Connection:
        """
        Create a connection based on database type and parameters

        Args:
            db_type: Database type ('duckdb', 'sqlite', 'postgresql')
            connection_params: Database connection parameters

        Returns:
            Connection usable by queries and inserts
        """
        if db_type not in DatabaseConfig.get_supported_databases():
            raise ValueError(f"Unsupported database type: {db_type}")

        # Caller params override the per-type defaults
        defaults = DatabaseConfig.get_default_config(db_type)['connection_params']
        connection_params = _merge(copy.deepcopy(defaults), dict(connection_params))

        if db_type == 'duckdb':
            database = connection_params['database']
            if database != ':memory:':
                Path(database).parent.mkdir(parents=True, exist_ok=True)
            logger.info(f"Opening duckdb database: {database}")
            return DuckDBConnection(database, connection_params.get('settings'))

        if db_type == 'sqlite':
            database = connection_params['database']
            conn_string = f"sqlite:///{database}"
        else:
            user = connection_params['user']
            password = connection_params['password']
            host = connection_params['host']
            port = connection_params['port']
            database = connection_params['database']
            conn_string = f"postgresql+psycopg2://{user}:{password}@{host}:{port}/{database}"

        engine_args = dict(connection_params.get('engine_args', {}))
        engine_args.setdefault('pool_pre_ping', True)
        engine_args.setdefault('echo', False)

        logger.info(f"Creating {db_type} engine: {db_type}:///{database}")
        return SQLAlchemyConnection(create_engine(conn_string, **engine_args))

    @staticmethod
    def get_default_config(db_type: str, database_path: Optional[str] = None) -> Dict[str, Any]:
        """
        Get default configuration for a database type

        Args:
            db_type: Database type
            database_path: Optional database file path

        Returns:
            Default configuration dictionary
        """
        if db_type in ('duckdb', 'sqlite'):
            return {
                'db_type': db_type,
                'connection_params': {
                    'database': database_path or ':memory:'
                }
            }
        elif db_type == 'postgresql':
            return {
                'db_type': 'postgresql',
                'connection_params': {
                    'user': 'postgres',
                    'password': 'postgres',
                    'host': 'localhost',
                    'port': 5432,
                    'database': database_path or 'postgres',
                    'engine_args': {
                        'pool_size': 5,
                        'max_overflow': 10
                    }
                }
            }
        else:
            raise ValueError(f"Unsupported database type: {db_type}")

    @staticmethod
    def get_supported_databases() -> List[str]:
        return ['duckdb', 'sqlite', 'postgresql']
