from typing import Optional
from typing import Union


def to_normal_str(text: Optional[Union[str, bytes]]) -> Optional[str]:
    """
    Make sure we return a normal string, no matter if we were given
    bytes straight out of an email body or an already decoded str.
    Line endings are left alone.
    """
    if text is None:
        return text
    if not isinstance(text, str):
        text = text.decode("utf-8")
    return text


def to_crlf(text: Optional[Union[str, bytes]]) -> Optional[str]:
    """
    iCalendar content lines are delimited by CRLF, but invitations
    passed through mail clients frequently come with bare LF.
    """
    text = to_normal_str(text)
    if text is None:
        return None
    text = text.replace("\n", "\r\n")
    text = text.replace("\r\r\n", "\r\n")
    return text
