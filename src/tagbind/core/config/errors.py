# src/tagbind/core/config/errors.py
"""
Exceções canônicas da camada de configuração do tagbind.

Este módulo define a hierarquia de exceções utilizadas durante o
carregamento das settings e do documento de ambiente.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - A ausência do ambiente obrigatório é tratada como falha fatal
    - Mensagens de erro são claras e direcionadas ao usuário

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção representa erro de binding ou de resolução de tags
"""


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração do tagbind.

    Permite captura genérica de erros de configuração e distinção clara
    entre falhas de carregamento e falhas de binding de fixtures.
    """


class EnvironmentNotFoundError(ConfigError):
    """
    Exceção levantada quando o arquivo de ambiente obrigatório
    (`{environments_dir}/{environment}.yml`) não é encontrado.

    Invariantes:
        - Sem o arquivo de ambiente não existe documento CONF válido

    Limites explícitos:
        - Não tenta inferir ou criar o ambiente automaticamente
        - A ausência do overlay `-private` nunca levanta esta exceção
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Exceção levantada quando o formato do arquivo não é suportado.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """
    Exceção levantada quando o conteúdo raiz do arquivo não é um dicionário.
    Listas ou valores escalares no root são inválidos.
    """


class ConfigTypeConflictError(ConfigError):
    """
    Exceção levantada quando ocorre conflito de tipos durante o deep-merge
    entre o ambiente e seu overlay `-private`.

    Exemplo de conflito:
        - ambiente: {"minio": {"endpoint": "http://minio:9000"}}
        - overlay:  {"minio": "disabled"}

    Invariantes:
        - Nenhum merge parcial é produzido em caso de conflito
    """


class InvalidSettingError(ConfigError):
    """Valor inválido para uma setting (ex.: LOG_LEVEL desconhecido)."""
