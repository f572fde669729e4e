# ---
# jupyter:
#   jupytext:
#     text_representation:
#       extension: .py
#       format_name: percent
#       format_version: '1.3'
#       jupytext_version: 1.16.4
#   kernelspec:
#     display_name: Python 3 (ipykernel)
#     language: python
#     name: python3
# ---

# %% [markdown]
# # Editing Modelfiles
#
# A Modelfile describes how to build a local model: the base weights, sampling
# parameters, a prompt template, a system prompt, adapters, a licence and some
# seed conversation.
#
# This notebook parses an existing Modelfile, modifies it with the builder and
# writes it back out.

# %%
from modelfile import ModelfileBuilder, parse
from modelfile.parameters import check_parameters
from modelfile.serialization import to_toml

# %% [markdown]
# ## Parse an existing Modelfile
#
# Parsing is permissive: instructions are kept in the order written, comments
# and blank lines are dropped, and repeated instructions are preserved.

# %%
text = '''
# Mario assistant
FROM llama3.2
PARAMETER temperature 1
PARAMETER stop <|eot_id|>

TEMPLATE """{{ if .System }}<|start_header_id|>system<|end_header_id|>

{{ .System }}<|eot_id|>{{ end }}{{ .Prompt }}"""

SYSTEM You are Mario from Super Mario Bros.
MESSAGE user Is Toronto in Canada?
MESSAGE assistant yes
'''

doc = parse(text)
for instruction in doc:
    print(instruction)

# %% [markdown]
# The typed accessors give quick access to the common parts.

# %%
print(doc.base)
print(doc.system)
print(doc.parameter_values("stop"))

# %% [markdown]
# ## Check the parameters
#
# Parameter names and values are not validated while parsing. The known
# parameter registry can be used to spot typos and out-of-range values.

# %%
check_parameters(doc)

# %%
check_parameters(parse("FROM llama3.2\nPARAMETER temprature 7\n"))

# %% [markdown]
# ## Modify with the builder
#
# `build_on` seeds a builder with the document. The builder enforces the
# document rules: one `FROM`, `TEMPLATE`, `SYSTEM` and `ADAPTER`, and a `FROM`
# is required before building.

# %%
updated = (
    doc.build_on()
    .parameter("num_ctx", 4096)
    .message("user", "Is Sacramento in Canada?")
    .message("assistant", "no")
    .build()
)
print(updated.render())

# %% [markdown]
# Setting the system prompt again is an error, since the document already
# has one.

# %%
try:
    doc.build_on().system("You are Luigi.")
except Exception as err:  # noqa: BLE001
    print(f"{type(err).__name__}: {err}")

# %% [markdown]
# ## Build from scratch
#
# Instructions may be given in any order; `build` emits them in a canonical
# order.

# %%
fresh = (
    ModelfileBuilder()
    .system("Answer in one sentence.")
    .base("mistral")
    .parameter("temperature", 0.2)
    .build()
)
print(fresh.render())

# %% [markdown]
# ## Structured form
#
# Documents can also be exchanged as JSON or TOML.

# %%
print(to_toml(fresh))
