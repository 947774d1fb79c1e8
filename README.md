# wasmir

Building blocks for working with the sections of a WebAssembly module in
Python: value and function types, tables, memories and the `producers`
custom section. Each collection can read its section payload from binary
form and encode its section back again.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Overview

- `wasmir.tombstone_arena`: `TombstoneArena` allocates items under `Id`s.
  Deleting an item marks its id dead, so ids are never reused, and calls the
  item's `on_delete` hook (see `Tombstone`). `len()` and iteration only see
  live items; `items()` yields `(id, item)` pairs.
- `wasmir.binary`: LEB128 and name encoding (`encode_u32`, `encode_u64`,
  `encode_name`, `encode_vector`, `encode_section`), a `Reader` for decoding,
  and the `WasmError` exception raised for malformed or unsupported data.
- `wasmir.ty`: the `ValType` and `RefType` enums (with `from_byte` and
  `to_byte`) and the function `Type`, whose equality and hashing ignore its
  id and name.
- `wasmir.parse`: `IndicesToIds` maps the indices of an input binary to
  arena ids; asking for an index it does not have raises `WasmError`.
- `wasmir.types`: `ModuleTypes`, a de-duplicated set of function types.
  Adding a type that already exists returns the existing id. Its section is
  emitted sorted by parameters, then results.
- `wasmir.tables`: `ModuleTables` and `Table`. `main_function_table()`
  returns the single `funcref` table, `None` if there is none, and raises
  `WasmError` if there is more than one.
- `wasmir.memories`: `ModuleMemories` and `Memory`, including shared,
  64-bit and custom page size memories.
- `wasmir.producers`: `ModuleProducers`, the `language`, `processed-by` and
  `sdk` fields of the `producers` custom section. Adding a name that a field
  already holds replaces its version.

`ModuleTypes.emit()`, `ModuleTables.emit()` and `ModuleMemories.emit()`
return a pair: the encoded section (empty bytes when there is nothing to
write; imported tables and memories are left out) and the ids emitted, in
index order. `ModuleProducers.emit()` returns the whole custom section, or
empty bytes when it has no fields. Each `parse_section` takes a section's
payload, without the section id and size.

## Example

```python
from wasmir.binary import Reader
from wasmir.memories import ModuleMemories
from wasmir.parse import IndicesToIds
from wasmir.ty import ValType
from wasmir.types import ModuleTypes

types = ModuleTypes()
sig = types.add([ValType.I32, ValType.I32], [ValType.I64])
assert types.find([ValType.I32, ValType.I32], [ValType.I64]) == sig

memories = ModuleMemories()
memories.add_local(False, False, 1, 16, None)
section, emitted = memories.emit()

reader = Reader(section)
reader.read_byte()                         # section id
payload = reader.read_bytes(reader.read_u32())

reparsed = ModuleMemories()
ids = IndicesToIds()
reparsed.parse_section(payload, ids)
assert len(reparsed) == 1
assert ids.get_memory(0) == next(iter(reparsed)).id
```

## What it does not do

There is no whole-module reader or writer: the package does not parse or
emit the magic header, imports, functions and code, globals, exports,
elements, data or the `name` section, and it has no validation or
dead-item removal across a module. Callers frame and order the sections
themselves.