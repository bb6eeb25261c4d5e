import asyncio
import logging
from typing import Any, Dict, List, Union

import uvicorn
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from dskeys import config
from dskeys.ds import ALGORITHM, keysize_from_object
from dskeys.exceptions import BadParameterException, KeySizeNotSupportedException, NotImplementedException
from dskeys.keys import PublicKey, SecretKey, generate_keypair_async
from dskeys.params import KEYSIZES

logger = logging.getLogger(__name__)

app = FastAPI(title="Service de signature DSA")

class GenerateRequest(BaseModel):
    algorithm: str = ALGORITHM
    keysize: Union[int, str] = config.DEFAULT_KEYSIZE

class SignRequest(BaseModel):
    secret_key: Dict[str, Any]
    message: str

class VerifyRequest(BaseModel):
    public_key: Dict[str, Any]
    message: str
    signature: str

class ParamsRequest(BaseModel):
    p: str
    q: str
    g: str

class KeysizeInfo(BaseModel):
    keysize: int
    p_bitlength: int
    q_bitlength: int
    hash_alg: str

@app.get("/keysizes", response_model=List[KeysizeInfo])
async def list_keysizes():
    """Liste les tailles de clé supportées"""
    return [
        KeysizeInfo(
            keysize=keysize,
            p_bitlength=params.p.bit_length(),
            q_bitlength=params.q_bitlength,
            hash_alg=params.hash_alg,
        )
        for keysize, params in KEYSIZES.items()
    ]

@app.post("/keys/generate")
async def generate_keys(request: GenerateRequest):
    """Génère une paire de clés"""
    try:
        future = generate_keypair_async(request.algorithm, request.keysize)
    except (KeySizeNotSupportedException, NotImplementedException) as e:
        logger.warning("Génération refusée: %s", e)
        raise HTTPException(status_code=400, detail=f"Génération impossible: {e}")

    keypair = await asyncio.wrap_future(future)
    return {
        "public_key": keypair.public_key.to_simple_object(),
        "secret_key": keypair.secret_key.to_simple_object(),
    }

@app.post("/sign")
async def sign_message(request: SignRequest):
    """Signe un message avec la clé privée fournie"""
    try:
        secret_key = SecretKey.from_simple_object(request.secret_key)
    except (BadParameterException, NotImplementedException) as e:
        logger.warning("Clé privée refusée: %s", e)
        raise HTTPException(status_code=400, detail=str(e))

    # le calcul tourne dans le pool de threads, la boucle d'événements reste libre
    signature = await asyncio.wrap_future(secret_key.sign_async(request.message))
    return {"signature": signature}

@app.post("/verify")
async def verify_signature(request: VerifyRequest):
    """Vérifie une signature ; une signature mal formée donne simplement valid=false"""
    try:
        public_key = PublicKey.from_simple_object(request.public_key)
    except (BadParameterException, NotImplementedException) as e:
        logger.warning("Clé publique refusée: %s", e)
        raise HTTPException(status_code=400, detail=str(e))

    return {"valid": public_key.verify(request.message, request.signature)}

@app.post("/params/validate")
async def validate_params(request: ParamsRequest):
    """Retrouve la taille de clé correspondant à un triplet (p, q, g)"""
    try:
        keysize = keysize_from_object(request.model_dump())
    except BadParameterException as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"keysize": keysize}

if __name__ == "__main__":
    logging.basicConfig(level=config.LOG_LEVEL)
    uvicorn.run("dskeys.api:app", host=config.HOST, port=config.PORT)
