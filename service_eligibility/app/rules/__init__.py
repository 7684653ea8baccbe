"""
Rules engine package.

Defines the eligibility rule model and the evaluation engine. Rules are
conjunctions of conditions over facts derived from a request and the
reference data; the engine tries them in a declared total order and the
first match decides the verdict and out-of-scope category.

Modules of interest:
- models: Rule, conditions, request and result models.
- reference: Recognized-entities registry and other reference lists.
- context: Derivation of evaluation facts from a request.
- definitions: The five eligibility rules and their order.
- engine: Ordered first-match evaluation.
"""
