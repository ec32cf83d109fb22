from typing import TypedDict, List, Dict, Any, Union

class GroundingSource(TypedDict):
    """A URL the provider actually grounded on."""
    url: str
    title: str

class ModelClaim(TypedDict, total=False):
    """One claim as written by the model in the compact contract."""
    c: str
    r: int
    conf: float
    exp: str
    src: List[Union[str, Dict[str, Any]]]

class ModelVerdict(TypedDict, total=False):
    """Compact model output: oa = overall assessment, oc = overall confidence."""
    oa: str
    oc: float
    claims: List[ModelClaim]

class GeminiReply(TypedDict):
    """Provider response tree plus the concatenated text parts."""
    raw: Dict[str, Any]
    text: str
