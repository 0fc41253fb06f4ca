"""
Service identification prefix for log lines.

Combines service name, deployment environment and process id so that lines
from several replicas can be told apart once aggregated.
"""

import os
from functools import lru_cache


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'event-registration')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')
    instance = os.getenv('HOSTNAME') or str(os.getpid())
    return f'{service_name}@{deploy_env}:{instance[:12]}'
