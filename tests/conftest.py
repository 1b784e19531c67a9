# tests/conftest.py
"""
テスト全体の共通設定。
Qt を使うテストはディスプレイの無い環境でも動くよう offscreen プラットフォームで実行します。
"""
import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
