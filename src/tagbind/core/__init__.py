"""
Core do tagbind.

Este pacote reúne a camada de resolução de valores e binding de dados
utilizada por step definitions de cenários BDD.

Componentes principais:
    - pathmap   → visão dot-path somente-leitura de documentos JSON-like
    - values    → TagResolver (expansão de `[CONF:...]`, `[CTXT:...]`, `[SHA256:...]`, ...)
    - binding   → FieldConverter e TableBinder
    - context   → ScenarioContext (store chave/valor, eventos e warnings por cenário)
    - config    → settings e documento de ambiente (YAML + overlay `-private`)

Princípios fundamentais:
    - Nenhum estado global: ambiente e contexto são passados explicitamente
    - Operações puras em memória, sem I/O fora de `config`

Limites explícitos:
    - Não implementa sessões de protocolo (HTTP, DNS, Redis, ...)
    - Não integra diretamente com o runner BDD
"""
