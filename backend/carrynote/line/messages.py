from datetime import date
from typing import Iterable, Sequence

from ..domain.report import MatchedReportLine

WEEKDAYS = ("月", "火", "水", "木", "金", "土", "日")

HELP_COMMANDS = ("ヘルプ", "help", "？")
FORMAT_COMMANDS = ("フォーマット", "format")

FORMAT_EXAMPLE = "例:\nヤマト30\n佐川20\nメモ:順調でした"


def format_report_date(d: date) -> str:
    """2025年1月5日 (日)"""
    return f"{d.year}年{d.month}月{d.day}日 ({WEEKDAYS[d.weekday()]})"


def _bullets(items: Iterable[str]) -> str:
    return "\n".join(f"• {item}" for item in items)


def help_message(app_url: str) -> str:
    return (
        "📚 Carry Note - 日報送信ガイド\n"
        "\n"
        "【日報の送り方】\n"
        "配送タイプと個数を1行ずつ書いて送信してください。\n"
        "\n"
        "例:\n"
        "ヤマト30\n"
        "佐川20\n"
        "ネコポス15\n"
        "メモ:順調でした\n"
        "\n"
        "【書き方のコツ】\n"
        "• 配送タイプ名と個数を書く\n"
        "• 「:」や空白で区切ってもOK\n"
        "• メモは「メモ:」で始める\n"
        "\n"
        "【コマンド】\n"
        "• ヘルプ - このメッセージ\n"
        "• フォーマット - 詳細な書き方\n"
        "\n"
        "🔗 アプリはこちら\n"
        f"{app_url}"
    )


def format_message() -> str:
    return (
        "📝 日報フォーマット\n"
        "\n"
        "【基本形式】\n"
        "配送タイプ名 個数\n"
        "配送タイプ名 個数\n"
        "メモ:任意のメモ\n"
        "\n"
        "【書き方の例】\n"
        "✅ ヤマト30\n"
        "✅ ヤマト宅急便 30\n"
        "✅ ヤマト:30\n"
        "✅ ヤマト　30\n"
        "\n"
        "【複数の配送タイプ】\n"
        "ヤマト宅急便 30\n"
        "佐川急便 20\n"
        "ネコポス 15\n"
        "メモ:午前中は雨でした\n"
        "\n"
        "【注意】\n"
        "• 配送タイプ名は登録済みのものを使用\n"
        "• 改行で複数の配送タイプを指定可能"
    )


def unknown_driver_message(app_url: str) -> str:
    return (
        "❌ ドライバー登録が見つかりません。\n"
        "\n"
        "アプリから登録を完了し、LINE連携を設定してください。\n"
        "\n"
        f"🔗 {app_url}"
    )


def nothing_recognized_message() -> str:
    return (
        "❌ 配送タイプと個数を認識できませんでした。\n"
        "\n"
        f"{FORMAT_EXAMPLE}\n"
        "\n"
        "「フォーマット」と送信すると詳細を確認できます。"
    )


def no_matches_message(unmatched: Sequence[str], registered: Sequence[str]) -> str:
    return (
        "❌ 登録されている配送タイプが見つかりませんでした。\n"
        "\n"
        "認識できなかったタイプ:\n"
        f"{_bullets(unmatched)}\n"
        "\n"
        "登録済みの配送タイプ:\n"
        f"{_bullets(registered)}"
    )


def confirmation_message(
    report_date: date,
    driver_name: str,
    matched: Sequence[MatchedReportLine],
    note: str = "",
    unmatched: Sequence[str] = (),
) -> str:
    total = sum(m.quantity for m in matched)
    parts = [
        "✅ 日報を受け付けました！\n"
        "\n"
        f"📅 日付: {format_report_date(report_date)}\n"
        f"👤 {driver_name}\n"
        f"📦 合計: {total}個\n"
        "\n"
        + _bullets(f"{m.delivery_type_name}: {m.quantity}個" for m in matched)
    ]
    if note:
        parts.append(f"📝 {note}")
    if unmatched:
        parts.append("⚠️ 以下は登録されていません:\n" + _bullets(unmatched))
    return "\n\n".join(parts)
